"""Pytest configuration for the test suite."""

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from db.database_manager import DatabaseManager
from helpers.debug_util import DebugUtil
from models.history_manager import HistoryManager
from services.trainer_service import TrainerService

BASE_TIME = datetime(2026, 10, 18, 14, 30, 0)


@pytest.fixture(scope="function")
def db_manager() -> Generator[DatabaseManager, None, None]:
    """Provide an in-memory DatabaseManager with its tables created."""
    db = DatabaseManager(debug_util=DebugUtil("quiet"))
    db.initialize_tables()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def temp_db() -> Generator[DatabaseManager, None, None]:
    """Create a DatabaseManager on a temp file and remove the file afterwards."""
    with tempfile.NamedTemporaryFile(delete=False, suffix=".db") as tmp:
        db_path = tmp.name

    db = DatabaseManager(db_path, debug_util=DebugUtil("quiet"))
    try:
        yield db
    finally:
        db.close()
        if os.path.exists(db_path):
            os.unlink(db_path)


@pytest.fixture(scope="function")
def history_manager(db_manager: DatabaseManager) -> HistoryManager:
    return HistoryManager(db_manager)


@pytest.fixture(scope="function")
def trainer(history_manager: HistoryManager) -> TrainerService:
    return TrainerService(history_manager, clock=lambda: BASE_TIME)

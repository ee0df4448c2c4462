"""Service initialization module.

Factory helpers to create and wire services with their dependencies.
"""

from __future__ import annotations

from typing import Tuple

from db.database_manager import DatabaseManager
from models.history_manager import HISTORY_CAPACITY, HistoryManager
from services.trainer_service import TrainerService


def init_services(
    db_path: str, capacity: int = HISTORY_CAPACITY
) -> Tuple[DatabaseManager, HistoryManager, TrainerService]:
    """Initialize and return core service instances.

    Example:
        db, history, trainer = init_services("path/to/db.sqlite").
    """
    db_manager = DatabaseManager(db_path)
    try:
        db_manager.initialize_tables()
        history_manager = HistoryManager(db_manager, capacity=capacity)
        trainer = TrainerService(history_manager)
    except Exception:
        # Close the database connection if initialization fails
        db_manager.close()
        raise
    return db_manager, history_manager, trainer

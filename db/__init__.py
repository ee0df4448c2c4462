"""
Database package for the typing trainer.
This package contains the SQLite storage used for session history.
"""
from .database_manager import DatabaseManager
from .exceptions import DatabaseError

__all__ = ["DatabaseManager", "DatabaseError"]

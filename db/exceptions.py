"""
Custom database exceptions for the typing trainer.
"""


class DatabaseError(Exception):
    """Base class for all database-related exceptions."""


class DBConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""


class IntegrityError(DatabaseError):
    """Raised when database integrity is violated."""


class SchemaError(DatabaseError):
    """Raised when there are schema-related issues."""

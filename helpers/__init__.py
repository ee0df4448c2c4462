"""Helper utilities for the typing trainer.

This package contains utilities used across the application.
"""

from .debug_util import DebugUtil  # noqa: F401

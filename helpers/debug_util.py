"""Debug utilities for controlling debug output across the trainer.

Supports a quiet mode (logging only) and a loud mode (print to stdout).
"""

import logging
import os

DEBUG_MODE_ENV_VAR = "TYPING_TRAINER_DEBUG_MODE"
_VALID_MODES = ("quiet", "loud")


class DebugUtil:
    """Manage debug output based on the debug mode setting.

    - "quiet": debug messages are logged only
    - "loud": debug messages are printed to stdout
    """

    def __init__(self, mode: str | None = None) -> None:
        """Initialize from `mode`, or from the TYPING_TRAINER_DEBUG_MODE variable.

        Unknown values fall back to "quiet".
        """
        requested = mode if mode is not None else os.environ.get(DEBUG_MODE_ENV_VAR, "quiet")
        self._mode = self._normalize(requested)

        self._logger = logging.getLogger(self.__class__.__name__)
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.DEBUG)

    @staticmethod
    def _normalize(mode: str) -> str:
        lowered = mode.lower()
        return lowered if lowered in _VALID_MODES else "quiet"

    def debug_mode(self) -> str:
        """Return the current debug mode ("quiet" or "loud")."""
        return self._mode

    def debugMessage(self, *args: object) -> None:
        """Output a debug message according to the current mode.

        In "quiet" mode messages go to the logger at DEBUG level.
        In "loud" mode messages are printed with a "[DEBUG]" prefix.
        """
        if self._mode == "loud":
            print("[DEBUG]", *args)
        else:
            message = " ".join(str(arg) for arg in args)
            if message:
                self._logger.debug(message)

    def set_mode(self, mode: str) -> None:
        """Change the debug mode. Invalid values default to "quiet"."""
        self._mode = self._normalize(mode)

    def is_loud(self) -> bool:
        return self._mode == "loud"

    def is_quiet(self) -> bool:
        return self._mode == "quiet"

"""
Log severities, numbered the way Cloud Logging numbers them
(google.logging.type.LogSeverity).
"""

import enum
import logging
from typing import Union


class Severity(enum.IntEnum):
    DEFAULT = 0
    DEBUG = 100
    INFO = 200
    NOTICE = 300
    WARNING = 400
    ERROR = 500
    CRITICAL = 600
    ALERT = 700
    EMERGENCY = 800

    @classmethod
    def parse(cls, value: Union["Severity", str, int]) -> "Severity":
        """
        Coerce a name, a Cloud Logging number or a stdlib logging level.

        Names are case-insensitive; "WARN" and "FATAL" are accepted as
        aliases. Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"unknown severity: {value!r}") from None
        if isinstance(value, int):
            if value in _STDLIB_LEVELS:
                return _STDLIB_LEVELS[value]
            return cls(value)
        raise ValueError(f"unknown severity: {value!r}")


_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

# logging.NOTSET (0) is left out so it keeps meaning DEFAULT.
_STDLIB_LEVELS = {
    logging.DEBUG: Severity.DEBUG,
    logging.INFO: Severity.INFO,
    logging.WARNING: Severity.WARNING,
    logging.ERROR: Severity.ERROR,
    logging.CRITICAL: Severity.CRITICAL,
}

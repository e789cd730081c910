"""Helpers for writing Cloud Logging entries from a Google Cloud Function."""

from .client import Client
from .config import OnFailure, Settings
from .errors import (
    CflogError,
    CloseError,
    ConfigurationError,
    SerializationError,
    SubmissionError,
)
from .payload import (
    Absent,
    Bytes,
    Document,
    JsonPayload,
    Text,
    TextPayload,
    classify,
)
from .severity import Severity
from .singleton import (
    configure,
    critical,
    debug,
    error,
    get_client,
    info,
    log,
    reset,
    warn,
)

__all__ = [
    "Absent",
    "Bytes",
    "CflogError",
    "Client",
    "CloseError",
    "ConfigurationError",
    "Document",
    "JsonPayload",
    "OnFailure",
    "SerializationError",
    "Settings",
    "Severity",
    "SubmissionError",
    "Text",
    "TextPayload",
    "classify",
    "configure",
    "critical",
    "debug",
    "error",
    "get_client",
    "info",
    "log",
    "reset",
    "warn",
]

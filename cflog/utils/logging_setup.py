"""
stdlib logging on top of cflog.

- CloudFunctionHandler ships records through a Client, so existing
  logging.getLogger(...) calls land in the function's Cloud Logging log.
- Records passed extra={"json_fields": {...}} become a jsonPayload:
  jsonPayload.message + the json_fields keys.
- The "cflog" logger is cflog's own diagnostic channel and is never routed
  back through the handler.
"""

import logging
from typing import Any, Dict, Optional

from .. import singleton
from ..client import Client
from ..errors import CflogError
from ..severity import Severity

DIAGNOSTIC_LOGGER = "cflog"

# Loggers whose records never go back through the handler; the transport
# logs through some of them while writing.
EXCLUDED_LOGGERS = (DIAGNOSTIC_LOGGER, "google.cloud", "google.auth", "google_auth_httplib2")


def _is_excluded(name: str) -> bool:
    return any(name == n or name.startswith(n + ".") for n in EXCLUDED_LOGGERS)


class CloudFunctionHandler(logging.Handler):
    """Write each record as one Cloud Logging entry."""

    def __init__(self, client: Optional[Client] = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._client = client

    @property
    def client(self) -> Client:
        return self._client if self._client is not None else singleton.get_client()

    def payload_for(self, record: logging.LogRecord) -> Any:
        message = self.format(record)
        json_fields = getattr(record, "json_fields", None)
        if isinstance(json_fields, dict):
            return {"message": message, **json_fields}
        return message

    def emit(self, record: logging.LogRecord) -> None:
        if _is_excluded(record.name):
            return
        try:
            self.client.log(Severity.parse(record.levelno), self.payload_for(record))
        except Exception:
            self.handleError(record)


def setup_logging(name: str, level: int = logging.INFO, client: Optional[Client] = None) -> logging.Logger:
    """Attach a CloudFunctionHandler to the named logger, once."""
    logger = logging.getLogger(name)
    if any(isinstance(h, CloudFunctionHandler) for h in logger.handlers):
        return logger

    try:
        handler = CloudFunctionHandler(client or singleton.get_client())
        logger.addHandler(handler)
        logger.setLevel(level)
    except CflogError as e:
        # Fallback to console if Cloud Logging is unavailable (local dev)
        logging.basicConfig(level=level)
        logger = logging.getLogger(name)
        logger.warning("Cloud Logging setup failed; using console. Error: %s", e)

    return logger


def log_structured_entry(message: str, severity: str, custom_log: Optional[Dict] = None) -> None:
    """
    Emit a JSON-structured entry through the shared client.

    Args:
        message: Short label for the entry (e.g., "Order processed").
        severity: "INFO" | "WARNING" | "ERROR" etc.
        custom_log: A dict with the structured details.

    Resulting shape in Cloud Logging:
        jsonPayload.message = <message>
        jsonPayload.custom  = <custom_log>
    """
    try:
        level = Severity.parse(severity)
    except ValueError:
        level = Severity.INFO
    singleton.log(level, {"message": message, "custom": custom_log or {}})

"""
A Cloud Logging client scoped to the running Cloud Function.

Each call to Client.log writes exactly one entry with one RPC. There is no
buffering, batching or retry; the caller decides what to do with failures.

    with Client() as c:
        c.log(Severity.DEBUG, "Debug message")
"""

import logging
from typing import Any, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud.logging_v2.services.logging_service_v2 import LoggingServiceV2Client
from google.cloud.logging_v2.types import LogEntry

from .config import Settings
from .errors import CloseError, ConfigurationError, SerializationError, SubmissionError
from .payload import classify
from .severity import Severity

logger = logging.getLogger(__name__)


class Client:
    """Owns a LoggingServiceV2Client plus the log name and resource it writes with."""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[LoggingServiceV2Client] = None) -> None:
        if settings is None:
            settings = Settings.from_env()
        if transport is None:
            try:
                transport = LoggingServiceV2Client()
            except (GoogleAuthError, GoogleAPIError) as e:
                raise ConfigurationError(f"could not create Cloud Logging client: {e}") from e

        self.settings = settings
        self.log_name = settings.log_name
        self.resource = settings.resource
        self._transport = transport
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def build_entry(self, severity: Severity, payload: Any) -> LogEntry:
        """Build the LogEntry for one call. Raises SerializationError."""
        # https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry
        return LogEntry(
            log_name=self.log_name,
            resource=self.resource,
            severity=int(Severity.parse(severity)),
            **classify(payload).entry_fields(),
        )

    def log(self, severity: Severity, payload: Any, timeout: Optional[float] = None) -> None:
        """
        Write one entry to Cloud Logging.

        Args:
            severity: Severity (or anything Severity.parse accepts).
            payload: str, bytes, None, or a JSON-serializable value.
            timeout: Seconds before the RPC is abandoned. Defaults to
                settings.timeout, then to the transport's own default.

        Raises:
            SubmissionError: the payload could not be serialized, the client
                is closed, or the write failed or timed out.
        """
        if self._closed:
            raise SubmissionError("client is closed")

        try:
            entry = self.build_entry(severity, payload)
        except (SerializationError, ValueError) as e:
            raise SubmissionError(f"could not build log entry: {e}") from e

        kwargs = {"entries": [entry], "retry": None}
        if timeout is None:
            timeout = self.settings.timeout
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            self._transport.write_log_entries(**kwargs)
        except GoogleAPIError as e:
            raise SubmissionError(f"could not write log entry to {self.log_name}: {e}") from e

    def close(self) -> None:
        """Release the transport. A second call does nothing."""
        if self._closed:
            return
        self._closed = True
        try:
            self._transport.transport.close()
        except Exception as e:
            raise CloseError(f"could not close Cloud Logging client: {e}") from e
        logger.debug("closed Cloud Logging client for %s", self.log_name)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

"""
Best-effort logging through one shared, lazily created Client.

These helpers never raise by default: a failure to build the client or to
write the entry is reported on the "cflog" stdlib logger and the call
returns. Pass on_failure=OnFailure.PROPAGATE to configure() (or set
CFLOG_ON_FAILURE=propagate) to get the exceptions instead, or
OnFailure.SILENT to drop them. Use Client directly when you need to know
whether an entry was written.

The shared client is never closed implicitly; process teardown reclaims it.
"""

import logging
import threading
from typing import Any, Optional

from .client import Client
from .config import OnFailure, Settings
from .errors import CflogError
from .severity import Severity

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_client: Optional[Client] = None
_settings: Optional[Settings] = None
_on_failure: Optional[OnFailure] = None


def configure(
    on_failure: Optional[OnFailure] = None,
    settings: Optional[Settings] = None,
    client: Optional[Client] = None,
) -> None:
    """
    Adjust the shared client.

    Args:
        on_failure: Failure policy; overrides settings.on_failure.
        settings: Settings used when the shared client is first built.
        client: An already built client to use instead of building one. A
            different shared client that was already in place is closed.
    """
    global _client, _settings, _on_failure
    replaced = None
    with _lock:
        if on_failure is not None:
            _on_failure = OnFailure(on_failure)
        if settings is not None:
            _settings = settings
        if client is not None:
            if _client is not None and _client is not client:
                replaced = _client
            _client = client
    if replaced is not None and not replaced.closed:
        replaced.close()


def _policy() -> OnFailure:
    if _on_failure is not None:
        return _on_failure
    if _client is not None:
        return _client.settings.on_failure
    if _settings is not None:
        return _settings.on_failure
    return OnFailure.DIAGNOSTIC_LOG


def get_client() -> Client:
    """Return the shared client, building it on first use. Raises ConfigurationError."""
    global _client, _settings
    client = _client
    if client is not None:
        return client
    with _lock:
        if _client is None:
            if _settings is None:
                _settings = Settings.from_env()
            _client = Client(_settings)
            logger.debug("created shared Cloud Logging client for %s", _client.log_name)
        return _client


def reset() -> None:
    """Close and forget the shared client and any configuration."""
    global _client, _settings, _on_failure
    with _lock:
        client, _client = _client, None
        _settings = None
        _on_failure = None
    if client is not None and not client.closed:
        client.close()


def _report(policy: OnFailure, message: str, payload: Any, err: CflogError) -> None:
    if policy is OnFailure.PROPAGATE:
        raise err
    if policy is OnFailure.DIAGNOSTIC_LOG:
        logger.warning(message, payload, err)


def log(severity: Severity, payload: Any, timeout: Optional[float] = None) -> None:
    """Write one entry through the shared client, handling failures per the policy."""
    try:
        client = get_client()
    except CflogError as e:
        _report(_policy(), "Could not create client to log payload %r: %s", payload, e)
        return

    try:
        client.log(severity, payload, timeout=timeout)
    except CflogError as e:
        _report(_policy(), "Could not log payload %r: %s", payload, e)


def debug(payload: Any, timeout: Optional[float] = None) -> None:
    log(Severity.DEBUG, payload, timeout=timeout)


def info(payload: Any, timeout: Optional[float] = None) -> None:
    log(Severity.INFO, payload, timeout=timeout)


def warn(payload: Any, timeout: Optional[float] = None) -> None:
    log(Severity.WARNING, payload, timeout=timeout)


def error(payload: Any, timeout: Optional[float] = None) -> None:
    log(Severity.ERROR, payload, timeout=timeout)


def critical(payload: Any, timeout: Optional[float] = None) -> None:
    log(Severity.CRITICAL, payload, timeout=timeout)

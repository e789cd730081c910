"""
Settings derived from the Cloud Functions environment.

https://cloud.google.com/functions/docs/configuring/env-var
"""

import enum
import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv
from google.api.monitored_resource_pb2 import MonitoredResource

from .errors import ConfigurationError

load_dotenv()

RESOURCE_TYPE = "cloud_function"
LOG_ID = "cloudfunctions.googleapis.com%2Fcloud-functions"


class OnFailure(str, enum.Enum):
    """What the shared-client helpers do when logging fails."""
    PROPAGATE = "propagate"
    DIAGNOSTIC_LOG = "diagnostic_log"
    SILENT = "silent"


def _getenv_any(*names: str) -> str:
    for name in names:
        v = os.getenv(name)
        if v:
            return v
    return ""


def _parse_on_failure(raw: str) -> OnFailure:
    if not raw:
        return OnFailure.DIAGNOSTIC_LOG
    try:
        return OnFailure(raw.strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"CFLOG_ON_FAILURE must be one of {[m.value for m in OnFailure]}, got {raw!r}"
        ) from None


def _parse_timeout(raw: str) -> Optional[float]:
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"CFLOG_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ConfigurationError(f"CFLOG_TIMEOUT must be positive, got {raw!r}")
    return timeout


@dataclass(frozen=True)
class Settings:
    project_id: str = ""
    function_name: str = ""
    region: str = ""
    on_failure: OnFailure = OnFailure.DIAGNOSTIC_LOG
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment. Values are used verbatim."""
        return cls(
            project_id=_getenv_any("GCP_PROJECT", "GOOGLE_CLOUD_PROJECT"),
            function_name=_getenv_any("FUNCTION_NAME", "K_SERVICE"),
            region=_getenv_any("FUNCTION_REGION"),
            on_failure=_parse_on_failure(os.getenv("CFLOG_ON_FAILURE", "")),
            timeout=_parse_timeout(os.getenv("CFLOG_TIMEOUT", "")),
        )

    @property
    def log_name(self) -> str:
        return f"projects/{self.project_id}/logs/{LOG_ID}"

    @property
    def labels(self) -> Dict[str, str]:
        return {
            "function_name": self.function_name,
            "project_id": self.project_id,
            "region": self.region,
        }

    @property
    def resource(self) -> MonitoredResource:
        return MonitoredResource(type=RESOURCE_TYPE, labels=self.labels)

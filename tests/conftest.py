from __future__ import annotations

from unittest import mock

import pytest

from cflog import singleton
from cflog.config import Settings


_ENV_VARS = (
    "GCP_PROJECT",
    "GOOGLE_CLOUD_PROJECT",
    "FUNCTION_NAME",
    "K_SERVICE",
    "FUNCTION_REGION",
    "CFLOG_ON_FAILURE",
    "CFLOG_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    singleton.reset()


@pytest.fixture
def settings() -> Settings:
    return Settings(project_id="my-project", function_name="hello", region="us-central1")


@pytest.fixture
def transport():
    return mock.MagicMock(name="LoggingServiceV2Client")


@pytest.fixture
def fake_transport_factory(monkeypatch):
    """Replace LoggingServiceV2Client so building a Client never touches the network."""
    created = []

    def _factory(*args, **kwargs):
        t = mock.MagicMock(name="LoggingServiceV2Client")
        created.append(t)
        return t

    monkeypatch.setattr("cflog.client.LoggingServiceV2Client", _factory)
    return created


def written_entries(transport):
    """All LogEntry objects passed to write_log_entries, in call order."""
    out = []
    for call in transport.write_log_entries.call_args_list:
        out.extend(call.kwargs["entries"])
    return out

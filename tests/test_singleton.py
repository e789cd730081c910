from __future__ import annotations

import logging
import threading
from unittest import mock

import pytest
from google.api_core.exceptions import ServiceUnavailable
from google.auth.exceptions import DefaultCredentialsError

import cflog
from cflog import singleton
from cflog.client import Client
from cflog.config import OnFailure, Settings
from cflog.errors import ConfigurationError, SubmissionError
from cflog.severity import Severity

from .conftest import written_entries


def test_first_call_builds_client_once(fake_transport_factory):
    cflog.debug("string")
    cflog.warn('{"message": "json string"}')

    assert len(fake_transport_factory) == 1
    (transport,) = fake_transport_factory
    entries = written_entries(transport)
    assert [int(e.severity) for e in entries] == [int(Severity.DEBUG), int(Severity.WARNING)]


@pytest.mark.parametrize(
    "fn, severity",
    [
        (cflog.debug, Severity.DEBUG),
        (cflog.info, Severity.INFO),
        (cflog.warn, Severity.WARNING),
        (cflog.error, Severity.ERROR),
        (cflog.critical, Severity.CRITICAL),
    ],
)
def test_severity_helpers(fake_transport_factory, fn, severity):
    fn("x")
    (entry,) = written_entries(fake_transport_factory[0])
    assert int(entry.severity) == int(severity)


def test_concurrent_first_use_builds_one_client(monkeypatch):
    built = []
    gate = threading.Barrier(8)

    def _factory(*args, **kwargs):
        built.append(1)
        return mock.MagicMock()

    monkeypatch.setattr("cflog.client.LoggingServiceV2Client", _factory)

    def _worker():
        gate.wait()
        cflog.info("hello")

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert singleton.get_client().settings is not None


def test_construction_failure_is_reported_not_raised(monkeypatch, caplog):
    factory = mock.MagicMock(side_effect=DefaultCredentialsError("no credentials"))
    monkeypatch.setattr("cflog.client.LoggingServiceV2Client", factory)

    with caplog.at_level(logging.WARNING, logger="cflog"):
        cflog.info("lost")

    assert "Could not create client to log payload 'lost'" in caplog.text


def test_construction_is_retried_after_failure(monkeypatch):
    transport = mock.MagicMock()
    factory = mock.MagicMock(side_effect=[DefaultCredentialsError("no credentials"), transport])
    monkeypatch.setattr("cflog.client.LoggingServiceV2Client", factory)

    cflog.info("first")
    cflog.info("second")

    (entry,) = written_entries(transport)
    assert entry.text_payload == "second"


def test_submission_failure_is_reported_not_raised(settings, transport, caplog):
    transport.write_log_entries.side_effect = ServiceUnavailable("down")
    cflog.configure(client=Client(settings, transport=transport))

    with caplog.at_level(logging.WARNING, logger="cflog"):
        cflog.error("boom")

    assert "Could not log payload 'boom'" in caplog.text


def test_propagate_policy(settings, transport):
    transport.write_log_entries.side_effect = ServiceUnavailable("down")
    cflog.configure(on_failure=OnFailure.PROPAGATE, client=Client(settings, transport=transport))

    with pytest.raises(SubmissionError):
        cflog.error("boom")


def test_propagate_policy_on_construction(monkeypatch):
    monkeypatch.setattr(
        "cflog.client.LoggingServiceV2Client",
        mock.MagicMock(side_effect=DefaultCredentialsError("no credentials")),
    )
    cflog.configure(on_failure="propagate")

    with pytest.raises(ConfigurationError):
        cflog.info("x")


def test_policy_from_environment(monkeypatch, fake_transport_factory):
    monkeypatch.setenv("CFLOG_ON_FAILURE", "propagate")
    client = singleton.get_client()
    client._transport.write_log_entries.side_effect = ServiceUnavailable("down")

    with pytest.raises(SubmissionError):
        cflog.info("x")


def test_silent_policy(settings, transport, caplog):
    transport.write_log_entries.side_effect = ServiceUnavailable("down")
    cflog.configure(on_failure=OnFailure.SILENT, client=Client(settings, transport=transport))

    with caplog.at_level(logging.DEBUG, logger="cflog"):
        cflog.error("boom")

    assert "Could not log" not in caplog.text


def test_configured_settings_are_used(fake_transport_factory):
    cflog.configure(settings=Settings(project_id="configured"))
    cflog.info("x")

    (entry,) = written_entries(fake_transport_factory[0])
    assert entry.log_name.startswith("projects/configured/")


def test_timeout_is_passed_through(settings, transport):
    cflog.configure(client=Client(settings, transport=transport))
    cflog.log(Severity.NOTICE, "x", timeout=0.5)
    assert transport.write_log_entries.call_args.kwargs["timeout"] == 0.5


def test_reset_closes_shared_client(settings, transport):
    cflog.configure(client=Client(settings, transport=transport))
    singleton.reset()

    transport.transport.close.assert_called_once()


def test_configure_closes_replaced_client(settings):
    old_transport, new_transport = mock.MagicMock(), mock.MagicMock()
    cflog.configure(client=Client(settings, transport=old_transport))
    new = Client(settings, transport=new_transport)

    cflog.configure(client=new)
    cflog.configure(client=new)

    old_transport.transport.close.assert_called_once()
    new_transport.transport.close.assert_not_called()
    assert singleton.get_client() is new

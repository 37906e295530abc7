import threading

import pytest

import xconnect_purge.app as app
from xconnect_purge.config import ConfigurationError
from xconnect_purge.http_client import close_http_client, get_http_client


def test_create_schedule_uses_interval_hours(monkeypatch):
    monkeypatch.setattr(app, "PURGE_INTERVAL_HOURS", 2)
    assert app.create_schedule().interval_seconds == 7200


def test_create_command_item_from_settings(monkeypatch):
    monkeypatch.setattr(app, "PURGE_PARAMETERS", "CutoffDays=365")
    assert app.create_command_item().parameters == {"CutoffDays": "365"}


def test_shared_http_client_is_reused():
    try:
        assert get_http_client() is get_http_client()
    finally:
        close_http_client()


def test_main_runs_on_start_and_stops(monkeypatch):
    calls = []

    class Cmd:
        def execute(self, items, command, schedule):
            calls.append(command)
            return True

    stop = threading.Event()
    stop.set()
    monkeypatch.setattr(app, "setup_logging", lambda: None)
    monkeypatch.setattr(app, "create_command", lambda: Cmd())
    monkeypatch.setattr(app, "PURGE_RUN_ON_START", True)
    monkeypatch.setattr("xconnect_purge.scheduler._scheduler_thread", None)
    app.main(stop_event=stop)
    assert len(calls) == 1


@pytest.mark.parametrize("hours", [0, -1])
def test_non_positive_interval_rejected(monkeypatch, hours):
    monkeypatch.setattr(app, "PURGE_INTERVAL_HOURS", hours)
    with pytest.raises(ConfigurationError, match="PURGE_INTERVAL_HOURS"):
        app.create_schedule()


def test_fractional_interval_hours(monkeypatch):
    monkeypatch.setattr(app, "PURGE_INTERVAL_HOURS", 0.5)
    assert app.create_schedule().interval_seconds == 1800

import threading

import pytest

import xconnect_purge.scheduler as scheduler
from xconnect_purge.models import CommandItem, ScheduleItem


class RecordingCommand:
    def __init__(self, result=True, error=None):
        self.calls = []
        self.result = result
        self.error = error
        self.called = threading.Event()

    def execute(self, items, command, schedule):
        self.calls.append((command, schedule))
        self.called.set()
        if self.error:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def reset_scheduler(monkeypatch):
    monkeypatch.setattr(scheduler, "_scheduler_thread", None)


def test_run_scheduled_stamps_last_run():
    cmd = RecordingCommand()
    schedule = ScheduleItem()
    assert scheduler.run_scheduled(cmd, CommandItem(), schedule) is True
    assert schedule.last_run is not None
    assert cmd.calls[0][1] is schedule


def test_run_scheduled_never_raises(caplog):
    schedule = ScheduleItem()
    assert scheduler.run_scheduled(RecordingCommand(error=RuntimeError("boom")), CommandItem(), schedule) is False
    assert schedule.last_run is not None
    assert "boom" in caplog.text


def test_start_scheduler_ticks_and_stops():
    cmd = RecordingCommand()
    stop = threading.Event()
    t = scheduler.start_scheduler(cmd, CommandItem(), ScheduleItem(interval_seconds=0.01), stop)
    assert cmd.called.wait(5)
    assert scheduler.start_scheduler(cmd, CommandItem(), ScheduleItem(), stop) is t
    stop.set()
    t.join(5)
    assert not t.is_alive()

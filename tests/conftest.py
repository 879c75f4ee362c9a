"""
Shared fixtures for health reporting tests.
"""
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


class RecordingLogger:
    """Collects messages per level."""

    def __init__(self):
        self.logs = {"debug": [], "info": [], "warning": [], "error": []}

    def debug(self, event, **kw):
        self.logs["debug"].append(event)

    def info(self, event, **kw):
        self.logs["info"].append(event)

    def warning(self, event, **kw):
        self.logs["warning"].append(event)

    def error(self, event, **kw):
        self.logs["error"].append(event)


class FakeTimer:
    def __init__(self, callback, interval_ms):
        self.callback = callback
        self.interval_ms = interval_ms
        self.unref_calls = 0
        self.cancel_calls = 0

    def unref(self):
        self.unref_calls += 1
        return self

    def cancel(self):
        self.cancel_calls += 1

    def tick(self):
        self.callback()


class FakeScheduler:
    """Stand-in for set_interval; optionally runs the tick once immediately."""

    def __init__(self, fire_immediately=False):
        self.fire_immediately = fire_immediately
        self.timers = []

    def __call__(self, callback, interval_ms):
        timer = FakeTimer(callback, interval_ms)
        self.timers.append(timer)
        if self.fire_immediately:
            callback()
        return timer

    @property
    def timer(self):
        return self.timers[-1] if self.timers else None


class FakeWriter:
    """Records writes and completes them synchronously."""

    def __init__(self):
        self.writes = []
        self.errors = []

    def fail_next(self, error):
        self.errors.append(error)

    def __call__(self, path, data, callback):
        self.writes.append((path, data))
        callback(self.errors.pop(0) if self.errors else None)


class CountingClock:
    """Returns 1, 2, 3, ... on successive calls."""

    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1
        return self.count


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def writer():
    return FakeWriter()


@pytest.fixture
def clock():
    return CountingClock()


@pytest.fixture
def make_reporter(tmp_path, recording_logger, scheduler, writer, clock):
    """Build a reporter with fakes; keyword arguments override any input."""
    from agent_health.infrastructure.health import HealthReporter

    def _make(**overrides):
        kwargs = {
            "fleet_id": "42",
            "output_dir": str(tmp_path),
            "interval": "1",
            "logger": recording_logger,
            "set_interval": scheduler,
            "write_file": writer,
            "clock": clock,
        }
        kwargs.update(overrides)
        return HealthReporter(**kwargs)

    return _make

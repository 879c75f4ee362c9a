"""
Tests for status rendering and background file writes.
"""
from concurrent.futures import ThreadPoolExecutor

from agent_health.infrastructure.health import file_writer
from agent_health.infrastructure.health.file_writer import render_status, write_file


def test_render_status_layout():
    text = render_status(
        healthy=False,
        code="NR-APM-007",
        message="HTTP proxy is misconfigured.",
        start_time=100,
        status_time=250,
    )

    assert text == (
        "healthy: false\n"
        "status: 'HTTP proxy is misconfigured.'\n"
        "last_error: NR-APM-007\n"
        "start_time_unix_nano: 100\n"
        "status_time_unix_nano: 250"
    )


def test_write_file_reports_success(tmp_path):
    results = []
    dest = tmp_path / "health-test.yaml"

    future = write_file(dest, "healthy: true", results.append)
    future.result(timeout=5)

    assert results == [None]
    assert dest.read_bytes() == b"healthy: true"


def test_write_file_reports_failure(tmp_path):
    results = []
    dest = tmp_path / "missing" / "health-test.yaml"

    future = write_file(dest, "healthy: true", results.append)
    future.result(timeout=5)

    assert len(results) == 1
    assert isinstance(results[0], OSError)
    assert not dest.exists()


def test_last_write_wins(tmp_path):
    dest = tmp_path / "health-test.yaml"

    write_file(dest, "first", lambda error: None).result(timeout=5)
    write_file(dest, "second", lambda error: None).result(timeout=5)

    assert dest.read_text(encoding="utf-8") == "second"


def test_write_file_runs_inline_after_pool_shutdown(tmp_path, monkeypatch):
    closed = ThreadPoolExecutor(max_workers=1)
    closed.shutdown()
    monkeypatch.setattr(file_writer, "_executor", closed)
    results = []
    dest = tmp_path / "health-test.yaml"

    future = write_file(dest, "healthy: false", results.append)

    assert future.done()
    assert results == [None]
    assert dest.read_text(encoding="utf-8") == "healthy: false"

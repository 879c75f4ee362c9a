"""
Tests for the agent shutdown sequence in the entry point.
"""
from main import shutdown_agent


def test_clean_shutdown_reports_healthy_with_shutdown_code(make_reporter, writer):
    reporter = make_reporter()

    shutdown_agent(reporter)

    assert writer.writes[-1][1].splitlines()[:3] == [
        "healthy: true",
        "status: 'Agent has shutdown.'",
        "last_error: NR-APM-099",
    ]


def test_shutdown_after_failure_keeps_failure_code(make_reporter, writer):
    reporter = make_reporter()
    reporter.set_status(reporter.STATUS_FORCED_DISCONNECT)

    shutdown_agent(reporter)

    assert writer.writes[-1][1].splitlines()[:3] == [
        "healthy: false",
        "status: 'Forced disconnect received from New Relic.'",
        "last_error: NR-APM-003",
    ]


def test_shutdown_without_fleet_control_writes_nothing(make_reporter, writer):
    reporter = make_reporter(fleet_id=None)

    shutdown_agent(reporter)

    assert writer.writes == []

"""
Health Reporting Infrastructure
Status codes, scheduling and file delivery for fleet control health checks.
"""

from agent_health.infrastructure.health.status_codes import (
    HealthStatusCode,
    VALID_CODES,
    is_valid_code,
    status_message,
)
from agent_health.infrastructure.health.scheduler import (
    IntervalTimer,
    set_interval,
)
from agent_health.infrastructure.health.file_writer import (
    render_status,
    write_file,
)
from agent_health.infrastructure.health.health_reporter import (
    HealthReporter,
    create_health_reporter,
)

__all__ = [
    "HealthStatusCode",
    "VALID_CODES",
    "is_valid_code",
    "status_message",
    "IntervalTimer",
    "set_interval",
    "render_status",
    "write_file",
    "HealthReporter",
    "create_health_reporter",
]

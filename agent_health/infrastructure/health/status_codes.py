"""
Health Status Codes
Fixed status-code vocabulary understood by fleet control.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class HealthStatusCode(str, Enum):
    """Status codes reported in the health file."""

    HEALTHY = "NR-APM-000"
    INVALID_LICENSE_KEY = "NR-APM-001"
    LICENSE_KEY_MISSING = "NR-APM-002"
    FORCED_DISCONNECT = "NR-APM-003"
    BACKEND_ERROR = "NR-APM-004"
    MISSING_APP_NAME = "NR-APM-005"
    MAXIMUM_APP_NAMES_EXCEEDED = "NR-APM-006"
    HTTP_PROXY_MISCONFIGURED = "NR-APM-007"
    AGENT_DISABLED = "NR-APM-008"
    CONNECT_ERROR = "NR-APM-009"
    CONFIG_PARSE_FAILURE = "NR-APM-010"
    AGENT_SHUTDOWN = "NR-APM-099"


VALID_CODES: Mapping[str, str] = MappingProxyType({
    HealthStatusCode.HEALTHY.value: "Healthy.",
    HealthStatusCode.INVALID_LICENSE_KEY.value: "Invalid license key.",
    HealthStatusCode.LICENSE_KEY_MISSING.value: "License key missing.",
    HealthStatusCode.FORCED_DISCONNECT.value: "Forced disconnect received from New Relic.",
    HealthStatusCode.BACKEND_ERROR.value: "HTTP error communicating with New Relic.",
    HealthStatusCode.MISSING_APP_NAME.value: "Missing application name in agent configuration.",
    HealthStatusCode.MAXIMUM_APP_NAMES_EXCEEDED.value: (
        "The maximum number of configured app names is exceeded."
    ),
    HealthStatusCode.HTTP_PROXY_MISCONFIGURED.value: "HTTP proxy is misconfigured.",
    HealthStatusCode.AGENT_DISABLED.value: "Agent is disabled via configuration.",
    HealthStatusCode.CONNECT_ERROR.value: "Failed to connect to the New Relic data collector.",
    HealthStatusCode.CONFIG_PARSE_FAILURE.value: "Agent config could not be parsed.",
    HealthStatusCode.AGENT_SHUTDOWN.value: "Agent has shutdown.",
})


def normalize_code(value) -> object:
    """Unwrap enum members to their code string; anything else is returned as-is."""
    if isinstance(value, HealthStatusCode):
        return value.value
    return value


def is_valid_code(value) -> bool:
    """
    Check whether a value is a known status code.

    Non-string input (including unhashable objects) is simply invalid.
    """
    value = normalize_code(value)
    return isinstance(value, str) and value in VALID_CODES


def status_message(code) -> str:
    """
    Look up the human-readable message for a status code.

    Args:
        code: A HealthStatusCode or its string value

    Returns:
        The fixed message for that code

    Raises:
        KeyError: If the code is not in the table
    """
    return VALID_CODES[normalize_code(code)]

"""
Health Reporter
Periodically persists agent health to a file watched by fleet control.
"""

import re
import threading
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Optional, Union
import structlog

from agent_health.infrastructure.health import file_writer, scheduler
from agent_health.infrastructure.health.status_codes import (
    HealthStatusCode,
    is_valid_code,
    normalize_code,
    status_message,
)

default_logger = structlog.get_logger(__name__, component="HealthReporter")

DEFAULT_INTERVAL_MS = 5_000

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class HealthReporter:
    """
    Writes the current health status to a YAML file on a fixed interval.

    Reporting is only enabled when a fleet id and an output directory are
    both provided. Otherwise the reporter is inert: set_status() still
    validates input, but nothing is scheduled or written.

    Usage:
        reporter = HealthReporter(
            fleet_id=settings.fleet_id,
            output_dir=settings.delivery_location,
            interval=settings.frequency,
        )
        reporter.set_status(HealthReporter.STATUS_BACKEND_ERROR)
        reporter.stop()
    """

    STATUS_HEALTHY = HealthStatusCode.HEALTHY.value
    STATUS_INVALID_LICENSE_KEY = HealthStatusCode.INVALID_LICENSE_KEY.value
    STATUS_LICENSE_KEY_MISSING = HealthStatusCode.LICENSE_KEY_MISSING.value
    STATUS_FORCED_DISCONNECT = HealthStatusCode.FORCED_DISCONNECT.value
    STATUS_BACKEND_ERROR = HealthStatusCode.BACKEND_ERROR.value
    STATUS_MISSING_APP_NAME = HealthStatusCode.MISSING_APP_NAME.value
    STATUS_MAXIMUM_APP_NAMES_EXCEEDED = HealthStatusCode.MAXIMUM_APP_NAMES_EXCEEDED.value
    STATUS_HTTP_PROXY_MISCONFIGURED = HealthStatusCode.HTTP_PROXY_MISCONFIGURED.value
    STATUS_AGENT_DISABLED = HealthStatusCode.AGENT_DISABLED.value
    STATUS_CONNECT_ERROR = HealthStatusCode.CONNECT_ERROR.value
    STATUS_CONFIG_PARSE_FAILURE = HealthStatusCode.CONFIG_PARSE_FAILURE.value
    STATUS_AGENT_SHUTDOWN = HealthStatusCode.AGENT_SHUTDOWN.value

    def __init__(
        self,
        *,
        fleet_id: Optional[str] = None,
        output_dir: Optional[Union[str, Path]] = None,
        interval: Optional[Union[str, int]] = None,
        logger: Any = None,
        set_interval: Callable[[Callable[[], None], int], Any] = scheduler.set_interval,
        write_file: Callable[..., Any] = file_writer.write_file,
        clock: Callable[[], int] = time.monotonic_ns,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        self._logger = logger if logger is not None else default_logger
        self._write_file = write_file
        self._clock = clock
        self._status_lock = threading.Lock()
        self._status = self.STATUS_HEALTHY
        self._timer = None
        self._destination: Optional[Path] = None
        self._start_time: Optional[int] = None
        self._interval_ms: Optional[int] = None

        if not fleet_id:
            self._logger.info("new relic control not present, skipping health reporting")
            return

        if output_dir is None:
            self._logger.error(
                "health check output directory not provided, skipping health reporting"
            )
            return

        if interval is None:
            self._logger.debug("health check interval not available, using default 5 seconds")
            interval_ms = DEFAULT_INTERVAL_MS
        else:
            interval_ms = self._coerce_interval(interval)

        self._start_time = self._clock()
        self._destination = Path(output_dir) / f"health-{id_factory()}.yaml"
        self._interval_ms = interval_ms

        self._logger.info(
            f"new relic control is present, writing health on interval "
            f"{interval_ms} milliseconds to {self._destination}"
        )
        self._timer = set_interval(self._health_check, interval_ms)
        self._timer.unref()

        self._logger.info("health reporter initialized")

    def _coerce_interval(self, interval: Union[str, int]) -> int:
        """Convert an interval in seconds to milliseconds, falling back to the default."""
        seconds = None
        if isinstance(interval, int) and not isinstance(interval, bool):
            seconds = interval
        elif isinstance(interval, str):
            match = _LEADING_INT.match(interval)
            if match:
                seconds = int(match.group(1))

        if seconds is None or not 0 < seconds * 1_000 <= scheduler.MAX_INTERVAL_MS:
            self._logger.warning(
                f'health check interval "{interval}" is not usable, using default 5 seconds'
            )
            return DEFAULT_INTERVAL_MS
        return seconds * 1_000

    @property
    def enabled(self) -> bool:
        """True when the reporter is scheduled to write status files."""
        return self._destination is not None

    @property
    def current_status(self) -> str:
        with self._status_lock:
            return self._status

    @property
    def healthy(self) -> bool:
        return self.current_status == self.STATUS_HEALTHY

    @property
    def destination_path(self) -> Optional[Path]:
        return self._destination

    @property
    def start_time(self) -> Optional[int]:
        return self._start_time

    @property
    def interval_ms(self) -> Optional[int]:
        return self._interval_ms

    def _health_check(self) -> None:
        with self._status_lock:
            code = self._status
        self._write_status(
            healthy=code == self.STATUS_HEALTHY,
            code=code,
            callback=self._on_tick_written,
        )

    def _on_tick_written(self, error: Optional[BaseException]) -> None:
        if error is not None:
            self._logger.error(f"error when writing out health status: {error}")

    def _on_shutdown_written(self, error: Optional[BaseException]) -> None:
        if error is not None:
            self._logger.error(
                f"error when writing out health status during shutdown: {error}"
            )

    def _write_status(
        self,
        healthy: bool,
        code: str,
        callback: Callable[[Optional[BaseException]], None],
    ) -> None:
        data = file_writer.render_status(
            healthy=healthy,
            code=code,
            message=status_message(code),
            start_time=self._start_time,
            status_time=self._clock(),
        )
        try:
            self._write_file(self._destination, data, callback)
        except Exception as e:
            callback(e)

    def set_status(self, status: Union[HealthStatusCode, str]) -> None:
        """
        Record a new health status; it is written on the next tick or stop().

        Unknown codes are rejected. The shutdown code never replaces an
        existing failure code, so the last real error stays visible.
        """
        if not is_valid_code(status):
            self._logger.warning(f"invalid health reporter status provided: {status}")
            return

        status = normalize_code(status)
        with self._status_lock:
            if status == self.STATUS_AGENT_SHUTDOWN and self._status != self.STATUS_HEALTHY:
                current = self._status
            else:
                self._status = status
                return

        self._logger.info(
            f"not setting shutdown health status due to current status code: {current}"
        )

    def stop(self) -> None:
        """
        Cancel the interval and write one final status record.

        A healthy reporter reports the shutdown code; an unhealthy one keeps
        its current code and only refreshes the status time.
        """
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

        if self._destination is None:
            return

        with self._status_lock:
            code = self._status
        healthy = code == self.STATUS_HEALTHY
        if healthy:
            code = self.STATUS_AGENT_SHUTDOWN

        self._write_status(
            healthy=healthy,
            code=code,
            callback=self._on_shutdown_written,
        )


def create_health_reporter(settings=None, **dependencies) -> HealthReporter:
    """
    Build a HealthReporter from health settings.

    Args:
        settings: HealthSettings instance (defaults to get_settings().health)
        **dependencies: Overrides for logger, set_interval, write_file, clock, id_factory

    Returns:
        HealthReporter, possibly inert if reporting is not configured
    """
    if settings is None:
        from agent_health.config import get_settings
        settings = get_settings().health

    return HealthReporter(
        fleet_id=settings.fleet_id,
        output_dir=settings.delivery_location,
        interval=settings.frequency,
        **dependencies,
    )

"""
Interval Scheduling
Repeating timers backed by background threads.
"""

import threading
from typing import Callable, Optional
import structlog

logger = structlog.get_logger(__name__)

# Longest delay a timer accepts (2**31 - 1 ms, about 24.8 days).
MAX_INTERVAL_MS = 2_147_483_647


class IntervalTimer:
    """
    Calls a function repeatedly, once per interval, on a worker thread.

    The first call happens one full interval after start(). A referenced
    timer runs on a regular thread and keeps the interpreter alive; after
    unref() it runs on a daemon thread so it never blocks process exit.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval_ms: int,
        name: str = "interval-timer",
    ):
        if not 1 <= interval_ms <= MAX_INTERVAL_MS:
            raise ValueError(
                f"interval_ms must be between 1 and {MAX_INTERVAL_MS}, got {interval_ms}"
            )
        self._callback = callback
        self._interval_ms = interval_ms
        self._name = name
        self._referenced = True
        self._cancelled = False
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._wakeup: Optional[threading.Event] = None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def referenced(self) -> bool:
        return self._referenced

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> "IntervalTimer":
        """Start the timer thread. Calling start() twice is a no-op."""
        with self._lock:
            if self._thread is None and not self._cancelled:
                self._spawn()
        return self

    def cancel(self) -> None:
        """Stop the timer. Safe to call before start() and more than once."""
        with self._lock:
            self._cancelled = True
            if self._wakeup is not None:
                self._wakeup.set()

    def unref(self) -> "IntervalTimer":
        """Allow the interpreter to exit while this timer is still scheduled."""
        self._set_referenced(False)
        return self

    def ref(self) -> "IntervalTimer":
        """Keep the interpreter alive for as long as this timer is scheduled."""
        self._set_referenced(True)
        return self

    def _set_referenced(self, referenced: bool) -> None:
        with self._lock:
            if self._referenced == referenced:
                return
            self._referenced = referenced
            # Thread daemon status is fixed at start, so hand the loop over
            # to a fresh worker with the new setting.
            if self._thread is not None and not self._cancelled:
                self._wakeup.set()
                self._spawn()

    def _spawn(self) -> None:
        wakeup = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(wakeup,),
            name=self._name,
            daemon=not self._referenced,
        )
        self._wakeup = wakeup
        self._thread = thread
        thread.start()

    def _run(self, wakeup: threading.Event) -> None:
        interval = self._interval_ms / 1000
        while not wakeup.wait(interval):
            try:
                self._callback()
            except Exception:
                logger.exception("interval_callback_failed", timer=self._name)


def set_interval(callback: Callable[[], None], interval_ms: int) -> IntervalTimer:
    """
    Schedule a function to run every interval_ms milliseconds.

    Returns:
        The started IntervalTimer; call cancel() to stop it
    """
    return IntervalTimer(callback, interval_ms, name="health-reporter-interval").start()

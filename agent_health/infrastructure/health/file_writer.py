"""
Health Status File Writer
Renders health status documents and writes them without blocking the caller.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from os import PathLike
from typing import Callable, Optional, Union

WriteCallback = Callable[[Optional[BaseException]], None]

# Shared pool; concurrent.futures joins its workers at interpreter exit so a
# write issued during shutdown still completes.
_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="health-writer")


def render_status(
    healthy: bool,
    code: str,
    message: str,
    start_time: int,
    status_time: int,
) -> str:
    """Render the five-line status document (no trailing newline)."""
    return "\n".join([
        f"healthy: {'true' if healthy else 'false'}",
        f"status: '{message}'",
        f"last_error: {code}",
        f"start_time_unix_nano: {start_time}",
        f"status_time_unix_nano: {status_time}",
    ])


def _write(path: Union[str, PathLike], data: str, callback: WriteCallback) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(data)
    except Exception as e:
        callback(e)
        return
    callback(None)


def write_file(
    path: Union[str, PathLike],
    data: str,
    callback: WriteCallback,
) -> Future:
    """
    Write text to a file in the background.

    Args:
        path: Destination file
        data: Text to write, encoded as UTF-8
        callback: Called with None on success or the exception on failure

    Returns:
        Future that resolves once the write and callback have run

    Once interpreter shutdown has begun the pool rejects new work; the
    write then runs on the calling thread so a final record still lands.
    """
    try:
        return _executor.submit(_write, path, data, callback)
    except RuntimeError:
        future: Future = Future()
        _write(path, data, callback)
        future.set_result(None)
        return future

"""Timing utilities for export performance profiling.

Timing is enabled via the CLAUDE_SESSION_EXPORT_DEBUG_TIMING environment
variable ("1", "true" or "yes"). Results are reported through the module
logger at INFO level, so the CLI raises the log level when timing is on.
"""

import contextvars
import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DEBUG_TIMING = os.getenv("CLAUDE_SESSION_EXPORT_DEBUG_TIMING", "").lower() in (
    "1",
    "true",
    "yes",
)

# Per-context timing data, so concurrent exports keep separate statistics
_timing_data: contextvars.ContextVar[Optional[dict[str, Any]]] = contextvars.ContextVar(
    "_timing_data", default=None
)


def _current_timing_data() -> dict[str, Any]:
    data = _timing_data.get()
    if data is None:
        data = {}
        _timing_data.set(data)
    return data


def reset_timing_data() -> None:
    """Start a fresh timing data dict for the current context."""
    _timing_data.set({})


def set_timing_var(name: str, value: Any) -> None:
    """Set a timing variable in the current context's timing data.

    Args:
        name: Variable name (e.g., "_markdown_timings", "_current_msg_id")
        value: Value to set
    """
    if DEBUG_TIMING:
        _current_timing_data()[name] = value


def get_timing_var(name: str, default: Any = None) -> Any:
    return _current_timing_data().get(name, default)


@contextmanager
def log_timing(
    phase: Union[str, Callable[[], str]],
    t_start: Optional[float] = None,
) -> Iterator[None]:
    """Context manager for logging phase timing.

    Args:
        phase: Phase name, or a callable returning it (evaluated at the end)
        t_start: Optional start time for calculating total elapsed time

    Example:
        with log_timing(lambda: f"Load ({len(messages)} messages)", t_start):
            messages = load_transcript(path)
    """
    if not DEBUG_TIMING:
        yield
        return

    t_phase_start = time.time()

    try:
        yield
    finally:
        t_now = time.time()
        phase_time = t_now - t_phase_start
        phase_name = phase() if callable(phase) else phase

        if t_start is not None:
            logger.info(
                "[TIMING] %-40s %8.3fs (total: %8.3fs)",
                phase_name,
                phase_time,
                t_now - t_start,
            )
        else:
            logger.info("[TIMING] %-40s %8.3fs", phase_name, phase_time)

        _current_timing_data()["_t_last"] = t_now


@contextmanager
def timing_stat(list_name: str) -> Iterator[None]:
    """Context manager for tracking timing statistics.

    Durations are only recorded when ``list_name`` was initialised with
    set_timing_var(list_name, []).

    Example:
        with timing_stat("_pygments_timings"):
            result = expensive_operation()
    """
    if not DEBUG_TIMING:
        yield
        return

    t_start = time.time()
    try:
        yield
    finally:
        duration = time.time() - t_start
        data = _current_timing_data()
        if list_name in data:
            msg_id = data.get("_current_msg_id", "")
            data[list_name].append((duration, msg_id))


def report_timing_statistics(
    operation_timings: list[Tuple[str, list[Tuple[float, str]]]],
) -> None:
    """Report timing statistics for rendering operations.

    Args:
        operation_timings: List of (name, timings) tuples where timings is a
            list of (duration, msg_id), e.g. [("Markdown", markdown_timings)]
    """
    for operation_name, timings in operation_timings:
        if timings:
            sorted_ops = sorted(timings, key=lambda x: x[0], reverse=True)
            total_time = sum(t[0] for t in timings)
            logger.info("[TIMING] %s rendering:", operation_name)
            logger.info("[TIMING]   Total operations: %d", len(timings))
            logger.info("[TIMING]   Total time: %.3fs", total_time)
            logger.info("[TIMING]   Slowest 10 operations:")
            for duration, msg_id in sorted_ops[:10]:
                logger.info("[TIMING]     %s: %.1fms", msg_id, duration * 1000)

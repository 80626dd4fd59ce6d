"""Loguru configuration for hostgrants.

Provides:
- Console logging with optional structured JSON files
- Component-bound loggers (``policy``, ``host``, ``cli``)
- A context manager that times host permission calls
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

__all__ = [
    "COMPONENTS",
    "configure_loguru",
    "get_logger",
    "timing_context",
]

COMPONENTS = ("policy", "host", "cli")


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    enable_console: bool = True,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    log_dir
        Directory for JSONL log files; no files are written when ``None``
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "10 MB", "1 day")
    retention
        Log retention policy (e.g., "7 days")
    enable_console
        Enable stderr output

    Example
    -------
    >>> from hostgrants.observability import configure_loguru
    >>> configure_loguru(level="DEBUG")
    """
    logger.remove()

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "hostgrants.jsonl",
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            serialize=True,
            backtrace=True,
            diagnose=False,
        )

        logger.add(
            log_dir / "timing.jsonl",
            format="{message}",
            level="DEBUG",
            rotation=rotation,
            retention=retention,
            serialize=True,
            filter=lambda record: record["extra"].get("timing", False),
        )

    # Records emitted without a bound component still render in the console format
    logger.configure(extra={"component": "hostgrants"})

    logger.bind(component="hostgrants").debug("Loguru configured", level=level, log_dir=str(log_dir))


def get_logger(component: str = "hostgrants") -> Any:
    """Get logger instance bound to ``component``.

    Parameters
    ----------
    component
        Component name (policy, host, cli)

    Returns
    -------
    Logger
        Loguru logger bound to component
    """
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "hostgrants",
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Time an operation and log its duration at DEBUG.

    Parameters
    ----------
    operation
        Name of the operation being timed
    component
        Component name for filtering logs
    **metadata
        Additional metadata to log

    Yields
    ------
    dict
        Context dictionary that can be updated with result data

    Example
    -------
    >>> with timing_context("permissions.contains", component="host") as ctx:
    ...     ctx["result"] = True
    """
    start_ns = time.perf_counter_ns()
    context: dict[str, Any] = dict(metadata)

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        logger.bind(component=component, timing=True, operation=operation).debug(
            f"END: {operation}",
            duration_ms=duration_ms,
            **context,
        )

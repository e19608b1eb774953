"""
Structured logging for CRConfig synthesis.

Log lines are JSON on stderr (stdout carries the document). Every line
emitted inside a synthesis run carries that run's ``run_id`` and CDN.
"""

import logging
import os
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any, Callable, Iterator

import structlog

SERVICE_NAME = "crconfig"

run_id_var: ContextVar[str] = ContextVar("run_id", default="")


def add_run_info(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Stamp the service name and, inside a run, the run ID."""
    event_dict["service"] = SERVICE_NAME
    run_id = run_id_var.get()
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict


def configure_logging(level: str = "INFO", format: str = "json") -> None:
    """
    Configure structlog on top of stdlib logging.

    LOG_LEVEL and LOG_FORMAT in the environment take precedence over the
    arguments. ``format`` is 'json' or 'console'.
    """
    level = os.getenv("LOG_LEVEL", level).upper()
    format = os.getenv("LOG_FORMAT", format).lower()
    numeric_level = getattr(logging, level, logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)
    logging.getLogger().setLevel(numeric_level)

    if format == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            add_run_info,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = SERVICE_NAME) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def store_logger() -> structlog.stdlib.BoundLogger:
    """Logger for database store operations."""
    return get_logger("crconfig.store")


@contextmanager
def synthesis_run(cdn: str, run_id: str | None = None) -> Iterator[str]:
    """
    Scope log lines to one synthesis run.

    Yields the run ID; the CDN name is bound to every line in the block.
    """
    run_id = run_id or f"{int(time.time())}-{uuid.uuid4().hex[:8]}"
    token = run_id_var.set(run_id)
    structlog.contextvars.bind_contextvars(cdn=cdn)
    try:
        yield run_id
    finally:
        structlog.contextvars.unbind_contextvars("cdn")
        run_id_var.reset(token)


def timed_phase(phase: str) -> Callable:
    """
    Log how long a synthesis phase took, and whether it failed.

    The exception, if any, is re-raised unchanged.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "Synthesis phase failed",
                    phase=phase,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    error=str(e),
                )
                raise
            logger.info(
                "Synthesis phase finished",
                phase=phase,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return result
        return wrapper
    return decorator


configure_logging()

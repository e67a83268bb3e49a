"""Logging configuration and per-operation timing."""

import functools
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from app.config import settings

logger = logging.getLogger("ris.operations")

F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def configure_logging(debug: bool | None = None) -> None:
    """Configure root logging for the engine.

    Args:
        debug: Log at DEBUG instead of INFO. Defaults to ``settings.debug``.
    """
    debug = settings.debug if debug is None else debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def _describe(result: Any) -> str:
    if result is None:
        return "none"
    if isinstance(result, list):
        return f"{len(result)} result(s)"
    return type(result).__name__


def log_operation(name: str) -> Callable[[F], F]:
    """Log every call of the decorated operation with its outcome and duration.

    Successful calls log at INFO as ``name → outcome (Nms)``; exceptions are
    logged as warnings and re-raised.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.monotonic() - start) * 1000
                logger.warning("%s → %s (%.0fms): %s", name, type(e).__name__, duration_ms, e)
                raise
            duration_ms = (time.monotonic() - start) * 1000
            logger.info("%s → %s (%.0fms)", name, _describe(result), duration_ms)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator

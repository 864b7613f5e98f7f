"""Logging setup for the mock timer feed."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

LOGGER_NAME = "mocktimer"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def get_logger(level: str | int | None = None) -> logging.Logger:
    """Return the package logger, attaching handlers on first use.

    A stream handler is always attached. When ``MOCKTIMER_LOG_FILE`` is set,
    records are also written to that file.
    """
    global _logger
    if _logger is None:
        with _logger_lock:
            if _logger is None:
                logger = logging.getLogger(LOGGER_NAME)
                logger.setLevel(logging.INFO)
                logger.propagate = False

                if not logger.handlers:
                    formatter = logging.Formatter(LOG_FORMAT)
                    stream = logging.StreamHandler()
                    stream.setFormatter(formatter)
                    logger.addHandler(stream)

                    log_file = os.environ.get("MOCKTIMER_LOG_FILE")
                    if log_file:
                        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
                        file_handler = logging.FileHandler(log_file, encoding="utf-8")
                        file_handler.setFormatter(formatter)
                        logger.addHandler(file_handler)

                _logger = logger

    if level is not None:
        _logger.setLevel(level)
    return _logger


def log_call(fn: F) -> F:
    """Decorator that logs a call, its result size and duration, or its failure."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger()
        arg_parts = [repr(a) for a in args]
        arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        count = len(result) if isinstance(result, list) else 1
        logger.info(
            "OK: %s(%s) -> %d items (%.3fs)",
            fn.__qualname__, arg_str, count, elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]

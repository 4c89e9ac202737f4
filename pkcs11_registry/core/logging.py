"""Structured logging with test-case correlation.

Provides logging for the registry and the harness that consumes it:
- JSON structured output for CI log aggregation
- Test case correlation (the running test case is attached to every line)
- Sensitive data masking (PINs never reach the logs)
- Operation timing

Usage:
    from pkcs11_registry.core.logging import get_logger, test_case_context

    logger = get_logger(__name__)

    with test_case_context("Digest.SHA-256"):
        logger.info("Running digest", mechanism="CKM_SHA256")
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Iterator

# Context variables for test-scoped data
test_case_var: ContextVar[str | None] = ContextVar("test_case", default=None)
slot_id_var: ContextVar[int | None] = ContextVar("slot_id", default=None)

# Sensitive fields to mask in logs
SENSITIVE_FIELDS = {
    "pin", "password", "secret", "key_value", "credential",
}


def mask_sensitive(data: dict[str, Any]) -> dict[str, Any]:
    """Mask sensitive values in a dictionary."""
    masked = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(s in key_lower for s in SENSITIVE_FIELDS):
            masked[key] = "[REDACTED]"
        elif isinstance(value, dict):
            masked[key] = mask_sensitive(value)
        else:
            masked[key] = value
    return masked


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if test_case := test_case_var.get():
            log_entry["test_case"] = test_case
        slot_id = slot_id_var.get()
        if slot_id is not None:
            log_entry["slot_id"] = slot_id

        if hasattr(record, "extra_fields"):
            log_entry.update(mask_sensitive(record.extra_fields))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Source location for warnings and above
        if record.levelno >= logging.WARNING:
            log_entry["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_entry, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable log formatter for interactive runs."""

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")

        prefix_parts = []
        if test_case := test_case_var.get():
            prefix_parts.append(f"test={test_case}")
        slot_id = slot_id_var.get()
        if slot_id is not None:
            prefix_parts.append(f"slot={slot_id}")

        prefix = f"[{' '.join(prefix_parts)}] " if prefix_parts else ""

        extra_str = ""
        if hasattr(record, "extra_fields") and record.extra_fields:
            masked = mask_sensitive(record.extra_fields)
            extra_str = " | " + " ".join(f"{k}={v}" for k, v in masked.items())

        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname[:4]

        message = (
            f"{color}{timestamp} {level}{self.RESET} "
            f"[{record.name}] {prefix}{record.getMessage()}{extra_str}"
        )

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class StructuredLogger(logging.Logger):
    """Logger with structured logging support."""

    def _log_with_extra(
        self,
        level: int,
        msg: str,
        args: tuple,
        exc_info: Any = None,
        **kwargs,
    ):
        extra = {"extra_fields": kwargs} if kwargs else {}
        super()._log(level, msg, args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args, **kwargs):
        if self.isEnabledFor(logging.DEBUG):
            self._log_with_extra(logging.DEBUG, msg, args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        if self.isEnabledFor(logging.INFO):
            self._log_with_extra(logging.INFO, msg, args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        if self.isEnabledFor(logging.WARNING):
            self._log_with_extra(logging.WARNING, msg, args, **kwargs)

    def error(self, msg: str, *args, exc_info: Any = None, **kwargs):
        if self.isEnabledFor(logging.ERROR):
            self._log_with_extra(logging.ERROR, msg, args, exc_info=exc_info, **kwargs)

    def critical(self, msg: str, *args, exc_info: Any = None, **kwargs):
        if self.isEnabledFor(logging.CRITICAL):
            self._log_with_extra(logging.CRITICAL, msg, args, exc_info=exc_info, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger for a module."""
    logging.setLoggerClass(StructuredLogger)
    logger = logging.getLogger(name)
    logging.setLoggerClass(logging.Logger)
    return logger


def setup_logging(json_output: bool = False, level: str = "INFO"):
    """Configure harness logging.

    Args:
        json_output: Use JSON format (for CI runs)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)

    if json_output:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanFormatter())

    root_logger.addHandler(handler)


@contextmanager
def test_case_context(name: str, slot_id: int | None = None) -> Iterator[None]:
    """Tag log lines emitted inside the block with a test case name."""
    test_case_token = test_case_var.set(name)
    slot_token = slot_id_var.set(slot_id) if slot_id is not None else None
    try:
        yield
    finally:
        test_case_var.reset(test_case_token)
        if slot_token is not None:
            slot_id_var.reset(slot_token)


# Not collected by pytest
test_case_context.__test__ = False


def log_operation(operation: str):
    """Decorator to log function execution with timing."""
    def decorator(func: Callable):
        logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.monotonic() - start) * 1000
                logger.error(
                    f"{operation} failed",
                    operation=operation,
                    error=str(e),
                    duration_ms=round(duration_ms, 2),
                )
                raise
            duration_ms = (time.monotonic() - start) * 1000
            logger.debug(
                f"{operation} completed",
                operation=operation,
                duration_ms=round(duration_ms, 2),
            )
            return result

        return wrapper

    return decorator

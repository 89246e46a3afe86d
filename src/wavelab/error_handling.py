"""Standardized Error Handling Utilities

Provides consistent error handling patterns across the WaveLab codebase so
that best-effort actions (export, clipboard) can degrade quietly while still
leaving a trace in the logs.
"""

from __future__ import annotations

import logging
import traceback
from contextlib import contextmanager
from enum import Enum
from typing import Any


class ErrorLevel(Enum):
    """Error severity levels for consistent logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class WaveLabError(Exception):
    """Base exception class for all WaveLab errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class ValidationError(WaveLabError):
    """Raised when input validation fails."""

    pass


class RasterizationError(WaveLabError):
    """Raised when SVG markup cannot be decoded or a bitmap cannot be encoded."""

    pass


class ExportError(WaveLabError):
    """Raised when an export artifact cannot be written."""

    pass


class ConfigurationError(WaveLabError):
    """Raised when configuration is invalid or missing."""

    pass


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[WaveLabError] = ExportError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
    reraise: bool = True,
) -> WaveLabError | None:
    """Standardized error handling with consistent logging and error transformation.

    Args:
        error: Original exception that occurred
        operation: Description of operation that failed
        error_type: Type of WaveLabError to raise
        level: Logging level for the error
        context: Additional context information
        logger: Logger to use (defaults to module logger)
        reraise: Whether to reraise the transformed exception

    Returns:
        The transformed error if reraise=False, otherwise None

    Raises:
        WaveLabError: Transformed error if reraise=True
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    message = f"Failed to {operation}: {error}"

    error_context = dict(context or {})
    error_context.update(
        {
            "operation": operation,
            "original_error_type": type(error).__name__,
            "original_error_message": str(error),
        }
    )

    transformed_error = error_type(message, cause=error, context=error_context)

    log_message = message
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        log_message += f" (context: {context_str})"

    log_func = getattr(logger, level.value)
    log_func(log_message)

    if level in [ErrorLevel.ERROR, ErrorLevel.CRITICAL]:
        logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    if reraise:
        raise transformed_error from error
    return transformed_error


@contextmanager
def error_context(
    operation: str,
    error_type: type[WaveLabError] = ExportError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Context manager for standardized error handling.

    Usage:
        with error_context("decode SVG markup", RasterizationError):
            risky_operation()

    WaveLab errors pass through unchanged; anything else is logged and
    re-raised as ``error_type``.
    """
    try:
        yield
    except WaveLabError:
        raise
    except Exception as e:
        handle_error(e, operation, error_type, level, context, logger, reraise=True)

"""Domain exceptions for SmartCombo."""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

logger = logging.getLogger("SMARTCOMBO.Errors")

T = TypeVar("T")


class SmartComboException(Exception):
    """Base exception for the SmartCombo service."""

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize exception with context.

        Args:
            message: Error message
            context: Dictionary with additional context (component, details, etc.)
        """
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        """String representation with context."""
        result = f"[{self.__class__.__name__}] {self.message}"
        if self.context:
            result += f" (context: {self.context})"
        return result


class ConfigurationError(SmartComboException):
    """Raised when configuration is missing or invalid."""
    pass


class EmbeddingError(SmartComboException):
    """Raised when embedding operations fail."""
    pass


class DimensionMismatchError(EmbeddingError):
    """Raised when a query and a candidate embedding differ in length."""

    def __init__(self, expected: int, actual: int, candidate: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.candidate = candidate
        context = {"expected": expected, "actual": actual}
        if candidate is not None:
            context["candidate"] = candidate
        super().__init__(
            f"Embedding length mismatch: query has {expected} dimensions, candidate has {actual}",
            context=context,
        )


def with_error_context(component: str, operation: str) -> Callable:
    """Decorator that wraps unexpected failures in an EmbeddingError.

    Args:
        component: Component name (e.g., "embedding")
        operation: Operation name (e.g., "encode")
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except SmartComboException:
                raise
            except Exception as e:
                context = {
                    "component": component,
                    "operation": operation,
                    "original_error": str(e),
                }
                logger.error(f"Error in {component}.{operation}: {e}")
                raise EmbeddingError(
                    f"Error in {component}.{operation}: {e}",
                    context=context,
                ) from e
        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper
    return decorator


__all__ = [
    "SmartComboException",
    "ConfigurationError",
    "EmbeddingError",
    "DimensionMismatchError",
    "with_error_context",
]

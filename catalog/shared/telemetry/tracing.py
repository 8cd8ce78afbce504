"""Decorator and helpers for tracing coordinator operations."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Allowlist of argument names recorded as span attributes (case-insensitive).
_SAFE_SPAN_ATTR_KEYS = frozenset({"record_id", "id", "ids", "count", "key"})


def _set_safe_span_attrs(span: trace.Span, arguments: dict[str, Any]) -> None:
    """Set span attributes from bound arguments; only allowlisted names are recorded."""
    for key, value in arguments.items():
        if not key.startswith("_") and key.lower() in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", str(value))


async def _run_in_span_async(span: trace.Span, run: Callable[[], Any]) -> Any:
    """Run an async callable, set span status, and record exceptions."""
    try:
        result = await run()
    except Exception as e:
        span.set_status(Status(StatusCode.ERROR, str(e)))
        span.record_exception(e)
        raise
    else:
        span.set_status(Status(StatusCode.OK))
        return result


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable:
    """Decorator to create a span around an async function.

    Allowlisted arguments are recorded whether passed by position or by
    keyword.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Optional dict of attributes to set on the span.

    Returns:
        Decorated function.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced() requires an async function, got {func!r}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                if attributes:
                    for key, value in attributes.items():
                        span.set_attribute(key, value)
                try:
                    bound = signature.bind_partial(*args, **kwargs)
                except TypeError:
                    # Let the call itself report the bad arguments.
                    pass
                else:
                    _set_safe_span_attrs(span, bound.arguments)
                return await _run_in_span_async(span, lambda: func(*args, **kwargs))

        return async_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)

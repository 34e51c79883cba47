"""Observability module for structured logging and tracing."""

from .logging import (
    add_trace_context,
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)
from .tracing import DEFAULT_SPAN_SOURCE, SpanSource, configure_tracing

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "add_trace_context",
    "bind_context",
    "clear_context",
    # Tracing
    "SpanSource",
    "DEFAULT_SPAN_SOURCE",
    "configure_tracing",
]

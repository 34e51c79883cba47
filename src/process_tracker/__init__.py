"""Process Tracker.

Wraps async units of work with structured lifecycle logging and
optional OpenTelemetry spans:
- tracker: track_process() and the @tracked decorator
- models: ProcessLoggerOptions
- config: Configuration management
- observability: Structured logging and span sources
"""

from .models import ProcessLoggerOptions
from .observability import DEFAULT_SPAN_SOURCE, SpanSource, get_logger
from .tracker import track_process, tracked

__version__ = "0.1.0"

__all__ = [
    "track_process",
    "tracked",
    "ProcessLoggerOptions",
    "SpanSource",
    "DEFAULT_SPAN_SOURCE",
    "get_logger",
]

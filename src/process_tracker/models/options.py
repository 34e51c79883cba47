"""Configuration object for tracked processes."""

import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from opentelemetry.trace import Span
from pydantic import BaseModel, ConfigDict, Field, field_validator

from process_tracker.config import LogLevel, TrackerSettings, get_settings
from process_tracker.observability.tracing import DEFAULT_SPAN_SOURCE, SpanSource


class ProcessLoggerOptions(BaseModel):
    """Log levels and tracing hooks applied to one or more tracked processes.

    Instances are immutable; derive variants with ``with_overrides``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    start_level: LogLevel = Field(default=LogLevel.INFO)
    success_level: LogLevel = Field(default=LogLevel.INFO)
    failure_level: LogLevel = Field(default=LogLevel.ERROR)
    configure_span: Callable[[Span], None] | None = Field(
        default=None,
        description="Called with the span right after it starts, only when tracing is active",
    )
    span_source_override: SpanSource | None = Field(
        default=None,
        description="Span source used instead of the shared default source",
    )

    @field_validator("start_level", "success_level", "failure_level", mode="before")
    @classmethod
    def coerce_level(cls, v: Any) -> Any:
        """Accept level names in any case and stdlib numeric levels."""
        if isinstance(v, int) and not isinstance(v, bool):
            return logging.getLevelName(v)
        if isinstance(v, str):
            return v.upper()
        return v

    @property
    def span_source(self) -> SpanSource:
        return self.span_source_override or DEFAULT_SPAN_SOURCE

    @classmethod
    def from_settings(cls, settings: TrackerSettings) -> "ProcessLoggerOptions":
        return cls(
            start_level=settings.start_level,
            success_level=settings.success_level,
            failure_level=settings.failure_level,
        )

    @classmethod
    def default(cls) -> "ProcessLoggerOptions":
        """Process-wide default options, built once from settings."""
        return _default_options()

    def with_overrides(self, **changes: Any) -> "ProcessLoggerOptions":
        return type(self)(**{**dict(self), **changes})


@lru_cache
def _default_options() -> ProcessLoggerOptions:
    return ProcessLoggerOptions.from_settings(get_settings().tracker)

"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Generator

import pytest
import structlog
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from structlog.testing import capture_logs

# Set test environment before importing settings
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from process_tracker import ProcessLoggerOptions, SpanSource  # noqa: E402


@pytest.fixture
def logger() -> structlog.stdlib.BoundLogger:
    """Fresh structlog logger; pair with structlog.testing.capture_logs()."""
    return structlog.get_logger("tests")


@pytest.fixture
def captured_logs() -> Generator[list[dict], None, None]:
    """Log events emitted while the test runs."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> Generator[TracerProvider, None, None]:
    """SDK provider scoped to one test; the global provider is never touched."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def span_source(tracer_provider: TracerProvider) -> SpanSource:
    return SpanSource("tests", tracer_provider=tracer_provider)


@pytest.fixture
def traced_options(span_source: SpanSource) -> ProcessLoggerOptions:
    return ProcessLoggerOptions(span_source_override=span_source)


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "slow: Slow tests")

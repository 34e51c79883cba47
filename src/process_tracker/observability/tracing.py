"""OpenTelemetry span sources and tracing bootstrap.

A ``SpanSource`` is a named factory of spans bound to a tracer provider.
It only hands out spans while something is listening, i.e. while the
provider it resolves to is a recording SDK provider rather than the API's
proxy/no-op default.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor, SpanExporter
from opentelemetry.trace import Span, SpanKind

from process_tracker.config import get_settings

_NON_RECORDING_PROVIDERS = (trace.ProxyTracerProvider, trace.NoOpTracerProvider)


class SpanSource:
    """Named source of spans.

    Without an explicit ``tracer_provider`` the source follows whatever
    provider is installed globally at the time a span is requested.
    """

    def __init__(
        self,
        name: str,
        version: str | None = None,
        tracer_provider: trace.TracerProvider | None = None,
    ):
        self.name = name
        self.version = version
        self._tracer_provider = tracer_provider

    def __repr__(self) -> str:
        return f"SpanSource(name={self.name!r}, version={self.version!r})"

    @property
    def tracer_provider(self) -> trace.TracerProvider:
        return self._tracer_provider or trace.get_tracer_provider()

    def has_listeners(self) -> bool:
        """Check whether spans started on this source are recorded anywhere."""
        return not isinstance(self.tracer_provider, _NON_RECORDING_PROVIDERS)

    def get_tracer(self) -> trace.Tracer:
        return self.tracer_provider.get_tracer(self.name, self.version)

    def start_span(self, name: str, kind: SpanKind = SpanKind.INTERNAL) -> Span | None:
        """Start a span, or return None when nothing would record it.

        The returned span is not made current; callers activate it with
        ``trace.use_span`` and must call ``end()`` exactly once.
        """
        if not self.has_listeners():
            return None
        span = self.get_tracer().start_span(name, kind=kind)
        if not span.is_recording():
            # Sampled out
            return None
        return span


DEFAULT_SPAN_SOURCE = SpanSource(get_settings().tracker.source_name)


def configure_tracing(
    service_name: str | None = None,
    exporter: SpanExporter | None = None,
    set_global: bool = True,
) -> TracerProvider | None:
    """Configure an OpenTelemetry SDK tracer provider.

    Args:
        service_name: Override service name (defaults to settings.observability.service_name)
        exporter: Span exporter to attach; spans are recorded but not exported when omitted
        set_global: Install the provider as the global tracer provider

    Returns:
        The configured provider, or None when tracing is disabled
    """
    settings = get_settings()
    if not settings.observability.tracing_enabled:
        return None

    resource = Resource.create(
        {SERVICE_NAME: service_name or settings.observability.service_name}
    )
    provider = TracerProvider(resource=resource)
    if exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(exporter))

    if set_global:
        trace.set_tracer_provider(provider)
    return provider

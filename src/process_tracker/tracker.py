"""Lifecycle logging and tracing around async units of work.

Usage:
    logger = get_logger(__name__)

    await track_process(logger, "ImportFile", lambda: import_file(path), metadata={"path": path})

    @tracked("SyncCatalog")
    async def sync_catalog(...): ...
"""

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from contextlib import AbstractContextManager, nullcontext, suppress
from typing import Any, TypeVar

import structlog
from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from process_tracker.config import LogLevel
from process_tracker.models import ProcessLoggerOptions
from process_tracker.observability.logging import get_logger
from process_tracker.timing import get_duration_ms, get_timestamp

T = TypeVar("T")

START_TEMPLATE = "[{name}] Starting process {metadata}"
SUCCESS_TEMPLATE = "[{name}] Completed in {duration}ms {metadata}"
FAILURE_TEMPLATE = "[{name}] Failed after {duration}ms {metadata}"

STATUS_ATTRIBUTE = "process.status"
DURATION_ATTRIBUTE = "process.duration_ms"


async def track_process(
    logger: structlog.stdlib.BoundLogger,
    name: str,
    action: Callable[..., Awaitable[T]],
    metadata: Any = None,
    options: ProcessLoggerOptions | None = None,
    cancellation: asyncio.Event | None = None,
) -> T:
    """Run ``action`` between a start log and a success or failure log.

    When the options' span source has listeners, the action also runs inside
    an INTERNAL span named ``name``, tagged with the outcome and duration.
    Exceptions raised by the action, cancellation included, are logged at the
    failure level and re-raised unchanged.

    Args:
        logger: Structured logger receiving the lifecycle events
        name: Process name, used in log messages and as the span name
        action: Coroutine function to run; receives ``cancellation`` when one is given
        metadata: Arbitrary value included in the start and outcome logs
        options: Log levels and span hooks (defaults to ProcessLoggerOptions.default())
        cancellation: Cooperative cancellation signal forwarded to ``action``

    Returns:
        Whatever ``action`` returns
    """
    if options is None:
        options = ProcessLoggerOptions.default()

    _log(logger, options.start_level, START_TEMPLATE, name, metadata)

    start = get_timestamp()
    span = options.span_source.start_span(name, SpanKind.INTERNAL)

    # Outcome logs are emitted while the span is current
    with _activate(span):
        try:
            if span is not None and options.configure_span is not None:
                options.configure_span(span)
            if cancellation is None:
                result = await action()
            else:
                result = await action(cancellation)
        except (Exception, asyncio.CancelledError) as exc:
            duration_ms = get_duration_ms(start)
            if span is not None:
                span.set_attribute(STATUS_ATTRIBUTE, "failure")
                span.set_attribute(DURATION_ATTRIBUTE, duration_ms)
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, str(exc)))
            # A broken logger must not replace the action's exception
            with suppress(Exception):
                _log(
                    logger,
                    options.failure_level,
                    FAILURE_TEMPLATE,
                    name,
                    metadata,
                    duration_ms=duration_ms,
                    outcome="failure",
                    exc_info=exc,
                )
            raise
        else:
            duration_ms = get_duration_ms(start)
            if span is not None:
                span.set_attribute(STATUS_ATTRIBUTE, "success")
                span.set_attribute(DURATION_ATTRIBUTE, duration_ms)
            _log(
                logger,
                options.success_level,
                SUCCESS_TEMPLATE,
                name,
                metadata,
                duration_ms=duration_ms,
                outcome="success",
            )
            return result
        finally:
            if span is not None:
                span.end()


def tracked(
    name: str | Callable[..., Awaitable[Any]] | None = None,
    *,
    metadata: Any = None,
    options: ProcessLoggerOptions | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> Any:
    """Decorate a coroutine function so every call runs through ``track_process``.

    Usable bare (``@tracked``) or with arguments (``@tracked("Name")``).
    The process name defaults to the function's qualified name and the
    logger to one named after the function's module.
    """
    if callable(name):
        return tracked()(name)

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"tracked() requires a coroutine function, got {fn!r}")

        process_name = name or fn.__qualname__
        process_logger = logger or get_logger(fn.__module__)

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await track_process(
                process_logger,
                process_name,
                lambda: fn(*args, **kwargs),
                metadata=metadata,
                options=options,
            )

        return wrapper

    return decorator


def _activate(span: Span | None) -> AbstractContextManager[Any]:
    if span is None:
        return nullcontext()
    return trace.use_span(
        span,
        end_on_exit=False,
        record_exception=False,
        set_status_on_exception=False,
    )


def _log(
    logger: structlog.stdlib.BoundLogger,
    level: LogLevel,
    template: str,
    name: str,
    metadata: Any,
    duration_ms: float | None = None,
    **kwargs: Any,
) -> None:
    if metadata is None:
        template = template.removesuffix(" {metadata}")
    message = template.format(
        name=name,
        metadata=metadata,
        duration=None if duration_ms is None else round(duration_ms, 3),
    )

    fields: dict[str, Any] = {"process": name, "metadata": metadata}
    if duration_ms is not None:
        fields["duration_ms"] = duration_ms

    getattr(logger, LogLevel(level).method_name)(message, **fields, **kwargs)

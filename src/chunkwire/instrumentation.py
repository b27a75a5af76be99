"""Optional OpenTelemetry instrumentation for chunkwire.

Call ``chunkwire.instrument()`` once at startup to enable tracing.
Requires ``opentelemetry-api`` to be installed; the library
works identically without it.
"""

import importlib.util
import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)

_tracer = None


def instrument(*, tracer_name: str = "chunkwire") -> None:
    """Enable OpenTelemetry tracing for normalized streams.

    Call once at startup, after configuring your TracerProvider.
    Requires ``opentelemetry-api``: ``pip install chunkwire[otel]``

    Example::

        from opentelemetry import trace
        from opentelemetry.sdk.trace import TracerProvider

        trace.set_tracer_provider(TracerProvider())

        import chunkwire
        chunkwire.instrument()

    Args:
        tracer_name: Name passed to ``trace.get_tracer()``.

    Raises:
        ImportError: If ``opentelemetry-api`` is not installed.
    """
    global _tracer
    if importlib.util.find_spec("opentelemetry.trace") is None:
        raise ImportError(
            "opentelemetry-api is required for instrumentation. "
            "Install it with: pip install chunkwire[otel]"
        )
    from opentelemetry import trace
    _tracer = trace.get_tracer(tracer_name)
    if isinstance(_tracer, trace.NoOpTracer):
        logger.info(
            "No TracerProvider configured; spans will be "
            "discarded. Set up a TracerProvider to export "
            "traces."
        )
    else:
        logger.info("Chunkwire instrumentation enabled")


def uninstrument() -> None:
    """Disable OpenTelemetry tracing."""
    global _tracer
    _tracer = None


@asynccontextmanager
async def stream_span(provider: str):
    """Wrap one normalized stream in a ``normalize_stream`` span."""
    if _tracer is None:
        yield None
        return
    with _tracer.start_as_current_span(
        f"normalize_stream {provider}",
        attributes={
            "chunkwire.operation.name": "normalize_stream",
            "chunkwire.provider.name": provider,
        },
    ) as span:
        yield span


def record_chunk_counts(span, counts: Mapping[str, int]) -> None:
    """Set one ``chunkwire.chunks.<type>`` counter per emitted chunk type."""
    if span is None:
        return
    for chunk_type, count in counts.items():
        span.set_attribute(
            f"chunkwire.chunks.{chunk_type.lower()}", count
        )
    span.set_attribute(
        "chunkwire.chunks.total", sum(counts.values())
    )


def record_error(span, exception: BaseException) -> None:
    """Record an exception and set ERROR status on a span.

    No-ops when *span* is ``None`` (tracing disabled).
    """
    if span is None:
        return
    from opentelemetry.trace import StatusCode

    span.set_status(StatusCode.ERROR, str(exception))
    span.record_exception(exception)
    span.set_attribute(
        "error.type", type(exception).__qualname__
    )

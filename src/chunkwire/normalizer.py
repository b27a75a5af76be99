"""Provider event to canonical chunk normalization.

:class:`ChunkNormalizer` projects each provider event onto zero, one or
two canonical chunks.  Provider streams never say when a tool call
starts, so the normalizer emits a :class:`~chunkwire.chunks.ToolCallBegin`
the first time it sees a tool-call id, right before that id's first
argument fragment.

``normalize_stream()`` wraps a normalizer around a whole event source.
"""

from __future__ import annotations

import inspect
import logging
from collections import Counter
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from typing import Any

from chunkwire.chunks import (
    Annotation,
    Data,
    Error,
    FinishMessage,
    FinishStep,
    ReasoningDelta,
    Source,
    StreamChunk,
    TextDelta,
    ToolCallBegin,
    ToolCallDelta,
    ToolCallResult,
)
from chunkwire.errors import UnhandledChunkTypeError
from chunkwire.instrumentation import record_chunk_counts, record_error, stream_span
from chunkwire.provider_events import parse_provider_event

logger = logging.getLogger(__name__)


class ChunkNormalizer:
    """Stateful projection of one provider stream onto canonical chunks.

    One instance serves exactly one stream.  The only state is the set
    of tool-call ids already announced with a ``ToolCallBegin``; an id
    moves from unannounced to announced once and never back.
    """

    def __init__(self) -> None:
        self._tool_calls: set[str] = set()

    @property
    def announced_tool_calls(self) -> frozenset[str]:
        return frozenset(self._tool_calls)

    def has_announced(self, tool_call_id: str) -> bool:
        return tool_call_id in self._tool_calls

    def process(self, event: Any) -> list[StreamChunk]:
        """Project a single provider event.

        Args:
            event: A provider event model, or a mapping with a ``type``
                key that is parsed into one first.

        Returns:
            The canonical chunks for this event, in emission order.

        Raises:
            UnhandledChunkTypeError: If the event kind is not known.
        """
        if isinstance(event, Mapping):
            event = parse_provider_event(event)

        event_type = getattr(event, "type", None)

        if event_type == "reasoning-delta":
            return [ReasoningDelta(text=event.text_delta)]

        elif event_type == "source":
            return [Source(source=event.source)]

        elif event_type == "text-delta":
            if not event.text_delta:
                return []
            return [TextDelta(text=event.text_delta)]

        elif event_type == "tool-call-delta":
            chunks: list[StreamChunk] = []
            if event.tool_call_id not in self._tool_calls:
                self._tool_calls.add(event.tool_call_id)
                logger.debug(f"Tool call started: {event.tool_name} ({event.tool_call_id})")
                chunks.append(ToolCallBegin(
                    tool_call_id=event.tool_call_id, tool_name=event.tool_name,
                ))
            chunks.append(ToolCallDelta(
                tool_call_id=event.tool_call_id, args_text_delta=event.args_text_delta,
            ))
            return chunks

        elif event_type == "annotations":
            return [Annotation(annotations=event.annotations)]

        elif event_type == "data":
            return [Data(data=event.data)]

        # Superseded by the tool-call-delta stream / provider bookkeeping.
        elif event_type in ("tool-call", "response-metadata"):
            return []

        elif event_type == "tool-result":
            return [ToolCallResult(tool_call_id=event.tool_call_id, result=event.result)]

        elif event_type == "step-finish":
            return [FinishStep(metadata=event.payload())]

        elif event_type == "finish":
            return [FinishMessage(metadata=event.payload())]

        elif event_type == "error":
            return [Error(error=event.error)]

        else:
            logger.error(f"Unhandled chunk type: {event_type!r}")
            raise UnhandledChunkTypeError(event_type)


async def _aiter(source: AsyncIterable[Any] | Iterable[Any]) -> AsyncIterator[Any]:
    if isinstance(source, AsyncIterable):
        async for event in source:
            yield event
    else:
        for event in source:
            yield event


async def _close(source: Any) -> None:
    aclose = getattr(source, "aclose", None)
    if aclose is not None:
        await aclose()
        return
    close = getattr(source, "close", None)
    if close is not None:
        result = close()
        if inspect.isawaitable(result):
            await result


async def normalize_stream(
    source: AsyncIterable[Any] | Iterable[Any],
    provider: str = "unknown",
    normalizer: ChunkNormalizer | None = None,
) -> AsyncIterator[StreamChunk]:
    """Normalize a provider event stream, yielding canonical chunks.

    The next event is only pulled once every chunk of the current one
    has been consumed.  Closing the returned generator closes *source*.
    Exceptions raised by *source* propagate unchanged.

    Args:
        source: Async or sync iterable of provider events.
        provider: Provider name recorded on the tracing span.
        normalizer: Normalizer to use; a fresh one per call by default.
    """
    normalizer = normalizer or ChunkNormalizer()
    counts: Counter[str] = Counter()
    events = _aiter(source)
    async with stream_span(provider) as span:
        try:
            async for event in events:
                for chunk in normalizer.process(event):
                    counts[chunk.type.name] += 1
                    yield chunk
        except Exception as e:
            record_error(span, e)
            raise
        finally:
            record_chunk_counts(span, counts)
            await events.aclose()
            await _close(source)

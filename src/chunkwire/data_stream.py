"""Data stream encoding for canonical chunks.

Each chunk becomes one line: the chunk's type code, a colon, and the
JSON value, e.g. ``0:"Hello"\\n`` or ``b:{"toolCallId":"t1",...}\\n``.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator

from chunkwire.chunks import StreamChunk

DATA_STREAM_HEADERS = {
    "Content-Type": "text/plain; charset=utf-8",
    "x-vercel-ai-data-stream": "v1",
}


def encode_chunk(chunk: StreamChunk) -> str:
    data = json.dumps(chunk.value, separators=(",", ":"), ensure_ascii=False)
    return f"{chunk.type.value}:{data}\n"


async def data_stream_generator(
    chunk_stream: AsyncIterator[StreamChunk],
) -> AsyncIterator[str]:
    """Convert a StreamChunk async iterator into data stream lines."""
    async for chunk in chunk_stream:
        yield encode_chunk(chunk)

"""Replay a recorded provider stream as data stream lines.

Reads provider events (one JSON object per line, as captured from a
provider SDK's full stream) and prints the normalized data stream.

Demonstrates:
- Feeding decoded events into normalize_stream()
- Encoding canonical chunks with data_stream_generator()
- Tracing the stream with OpenTelemetry

Usage:
    uv run examples/replay_stream.py recording.jsonl --provider openai --trace
"""

import argparse
import asyncio
import json
import logging
import sys

from chunkwire.data_stream import data_stream_generator
from chunkwire.normalizer import normalize_stream


def setup_tracing(service_name: str):
    from opentelemetry import trace
    from opentelemetry.sdk.resources import SERVICE_NAME, Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import (
        SimpleSpanProcessor, ConsoleSpanExporter,
    )
    from chunkwire.instrumentation import instrument

    provider = TracerProvider(
        resource=Resource({SERVICE_NAME: service_name})
    )
    provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    instrument()


async def read_events(path: str):
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)
                await asyncio.sleep(0)


async def main():
    parser = argparse.ArgumentParser(description="Replay a provider stream")
    parser.add_argument("recording")
    parser.add_argument("--provider", default="unknown")
    parser.add_argument("--trace", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s:%(name)s:%(levelname)s:%(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    if args.trace:
        setup_tracing("chunkwire-replay")

    chunks = normalize_stream(read_events(args.recording), provider=args.provider)
    async for line in data_stream_generator(chunks):
        sys.stdout.write(line)


if __name__ == "__main__":
    asyncio.run(main())

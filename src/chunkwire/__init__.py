from chunkwire.instrumentation import instrument, uninstrument
from chunkwire.normalizer import ChunkNormalizer, normalize_stream

__all__ = ["ChunkNormalizer", "instrument", "normalize_stream", "uninstrument"]

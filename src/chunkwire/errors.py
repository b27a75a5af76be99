"""Exceptions raised by chunkwire."""

from __future__ import annotations

from dataclasses import dataclass


class ChunkwireError(Exception):
    """Base for all chunkwire exceptions."""


class UnhandledChunkTypeError(ChunkwireError, TypeError):
    """A provider event kind outside the known set reached the normalizer.

    Fatal for the stream: no canonical chunk is produced for this event
    or any event after it.
    """

    def __init__(self, chunk_type: object):
        self.chunk_type = chunk_type
        super().__init__(f"Unhandled chunk type: {chunk_type}")


class AnchorNotFoundError(ChunkwireError, LookupError):
    """The anchor message id is not present in the message list."""

    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"Message not found: {message_id}")


class ConfigurationError(ChunkwireError, ValueError):
    """Required settings are missing."""


class CodemodExecutionError(ChunkwireError, RuntimeError):
    """The codemod engine could not be run or exited non-zero."""

    def __init__(self, command: list[str], returncode: int | None, output: str = ""):
        self.command = command
        self.returncode = returncode
        self.output = output
        if returncode is None:
            detail = "could not be started"
        else:
            detail = f"exited with status {returncode}"
        super().__init__(f"Codemod command {command[0]!r} {detail}")


@dataclass
class TransformError:
    """A single file the codemod engine failed to transform.

    Collected and returned by :func:`chunkwire.codemod.transform`,
    never raised.
    """

    transform: str
    filename: str
    summary: str

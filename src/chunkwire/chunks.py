"""Canonical stream chunks consumed by UI-state aggregators.

Every chunk carries a :class:`ChunkType` whose value is the single
character code used on the data stream wire (``0:"Hello"\\n``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class ChunkType(Enum):
    TEXT_DELTA = "0"
    DATA = "2"
    ERROR = "3"
    ANNOTATION = "8"
    TOOL_CALL_RESULT = "a"
    TOOL_CALL_BEGIN = "b"
    TOOL_CALL_DELTA = "c"
    FINISH_MESSAGE = "d"
    FINISH_STEP = "e"
    REASONING_DELTA = "g"
    SOURCE = "h"


@dataclass
class StreamChunk(ABC):
    """Base for all canonical chunks."""

    type: ClassVar[ChunkType]

    @property
    @abstractmethod
    def value(self) -> Any:
        """The JSON-serializable payload written after the type code."""


@dataclass
class TextDelta(StreamChunk):
    type: ClassVar[ChunkType] = ChunkType.TEXT_DELTA

    text: str = ""

    @property
    def value(self) -> str:
        return self.text


@dataclass
class ReasoningDelta(StreamChunk):
    type: ClassVar[ChunkType] = ChunkType.REASONING_DELTA

    text: str = ""

    @property
    def value(self) -> str:
        return self.text


@dataclass
class Source(StreamChunk):
    type: ClassVar[ChunkType] = ChunkType.SOURCE

    source: dict = field(default_factory=dict)

    @property
    def value(self) -> dict:
        return self.source


@dataclass
class ToolCallBegin(StreamChunk):
    """Announces a tool call before its first argument fragment."""

    type: ClassVar[ChunkType] = ChunkType.TOOL_CALL_BEGIN

    tool_call_id: str = ""
    tool_name: str = ""

    @property
    def value(self) -> dict:
        return {"toolCallId": self.tool_call_id, "toolName": self.tool_name}


@dataclass
class ToolCallDelta(StreamChunk):
    type: ClassVar[ChunkType] = ChunkType.TOOL_CALL_DELTA

    tool_call_id: str = ""
    args_text_delta: str = ""

    @property
    def value(self) -> dict:
        return {"toolCallId": self.tool_call_id, "argsTextDelta": self.args_text_delta}


@dataclass
class ToolCallResult(StreamChunk):
    type: ClassVar[ChunkType] = ChunkType.TOOL_CALL_RESULT

    tool_call_id: str = ""
    result: Any = None

    @property
    def value(self) -> dict:
        return {"toolCallId": self.tool_call_id, "result": self.result}


@dataclass
class Annotation(StreamChunk):
    type: ClassVar[ChunkType] = ChunkType.ANNOTATION

    annotations: list = field(default_factory=list)

    @property
    def value(self) -> list:
        return self.annotations


@dataclass
class Data(StreamChunk):
    type: ClassVar[ChunkType] = ChunkType.DATA

    data: Any = None

    @property
    def value(self) -> Any:
        return self.data


@dataclass
class FinishStep(StreamChunk):
    """End of one generation step; ``metadata`` is the step-finish payload."""

    type: ClassVar[ChunkType] = ChunkType.FINISH_STEP

    metadata: dict = field(default_factory=dict)

    @property
    def value(self) -> dict:
        return self.metadata


@dataclass
class FinishMessage(StreamChunk):
    """End of the whole message; ``metadata`` is the finish payload."""

    type: ClassVar[ChunkType] = ChunkType.FINISH_MESSAGE

    metadata: dict = field(default_factory=dict)

    @property
    def value(self) -> dict:
        return self.metadata


@dataclass
class Error(StreamChunk):
    """An error reported by the provider as part of the stream."""

    type: ClassVar[ChunkType] = ChunkType.ERROR

    error: Any = None

    @property
    def value(self) -> Any:
        return self.error

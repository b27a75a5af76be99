"""Typed provider stream events.

Providers (via their SDKs) emit a closed set of event kinds, told apart
by the ``type`` field.  Each kind is a pydantic model; camelCase wire
names (``toolCallId``) and snake_case names (``tool_call_id``) are both
accepted.  :func:`parse_provider_event` builds the right model from an
already-decoded mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from chunkwire.errors import UnhandledChunkTypeError


class ProviderEventBase(BaseModel):
    """Base for all provider events."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def payload(self) -> dict[str, Any]:
        """Every field the event was given, except ``type``, by wire name."""
        return self.model_dump(by_alias=True, exclude={"type"}, exclude_unset=True)


class ReasoningDeltaEvent(ProviderEventBase):
    type: Literal["reasoning-delta"] = "reasoning-delta"
    text_delta: str


class SourceEvent(ProviderEventBase):
    type: Literal["source"] = "source"
    source: dict[str, Any]


class TextDeltaEvent(ProviderEventBase):
    type: Literal["text-delta"] = "text-delta"
    text_delta: str


class ToolCallDeltaEvent(ProviderEventBase):
    type: Literal["tool-call-delta"] = "tool-call-delta"
    tool_call_id: str
    tool_name: str
    args_text_delta: str


class ToolCallEvent(ProviderEventBase):
    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str = ""
    tool_name: str = ""
    args: Any = None


class ToolResultEvent(ProviderEventBase):
    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str
    tool_name: str = ""
    args: Any = None
    result: Any = None


class ResponseMetadataEvent(ProviderEventBase):
    model_config = ConfigDict(extra="allow", protected_namespaces=())

    type: Literal["response-metadata"] = "response-metadata"
    id: str | None = None
    model_id: str | None = None
    timestamp: Any = None


class StepFinishEvent(ProviderEventBase):
    model_config = ConfigDict(extra="allow")

    type: Literal["step-finish"] = "step-finish"
    finish_reason: str
    usage: dict[str, Any] | None = None
    is_continued: bool = False


class FinishEvent(ProviderEventBase):
    model_config = ConfigDict(extra="allow")

    type: Literal["finish"] = "finish"
    finish_reason: str
    usage: dict[str, Any] | None = None


class ErrorEvent(ProviderEventBase):
    type: Literal["error"] = "error"
    error: Any


class AnnotationsEvent(ProviderEventBase):
    type: Literal["annotations"] = "annotations"
    annotations: list[Any]


class DataEvent(ProviderEventBase):
    type: Literal["data"] = "data"
    data: Any


ProviderEvent = Annotated[
    Union[
        ReasoningDeltaEvent,
        SourceEvent,
        TextDeltaEvent,
        ToolCallDeltaEvent,
        ToolCallEvent,
        ToolResultEvent,
        ResponseMetadataEvent,
        StepFinishEvent,
        FinishEvent,
        ErrorEvent,
        AnnotationsEvent,
        DataEvent,
    ],
    Field(discriminator="type"),
]

PROVIDER_EVENT_TYPES: frozenset[str] = frozenset(
    model.model_fields["type"].default
    for model in get_args(get_args(ProviderEvent)[0])
)

_adapter: TypeAdapter = TypeAdapter(ProviderEvent)


def parse_provider_event(data: Mapping[str, Any]) -> ProviderEventBase:
    """Validate a decoded mapping into the matching provider event.

    Raises:
        UnhandledChunkTypeError: If ``data["type"]`` is not a known kind.
        pydantic.ValidationError: If a known kind has a malformed payload.
    """
    event_type = data.get("type")
    if event_type not in PROVIDER_EVENT_TYPES:
        raise UnhandledChunkTypeError(event_type)
    return _adapter.validate_python(dict(data))

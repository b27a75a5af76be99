import pytest

from chunkwire.message import MessageRole, UIMessage
from chunkwire.provider_events import (
    AnnotationsEvent,
    DataEvent,
    ErrorEvent,
    FinishEvent,
    ReasoningDeltaEvent,
    ResponseMetadataEvent,
    SourceEvent,
    StepFinishEvent,
    TextDeltaEvent,
    ToolCallDeltaEvent,
    ToolCallEvent,
    ToolResultEvent,
)


# ---------------------------------------------------------------------------
# Fake event sources
# ---------------------------------------------------------------------------

class FakeEventSource:
    """Async provider event source that records how far it was pulled.

    Raises *error* once every event has been yielded, if given.
    """

    def __init__(self, events, error: BaseException | None = None):
        self.events = list(events)
        self.error = error
        self.pulled = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.closed:
            raise StopAsyncIteration
        if self.pulled < len(self.events):
            event = self.events[self.pulled]
            self.pulled += 1
            return event
        if self.error is not None:
            raise self.error
        raise StopAsyncIteration

    async def aclose(self):
        self.closed = True


class UnknownEvent:
    """An event kind no provider SDK is known to emit."""

    type = "ping"


# ---------------------------------------------------------------------------
# Event builder helpers
# ---------------------------------------------------------------------------

def tool_call_deltas(
    tool_call_id: str, tool_name: str, fragments: list[str],
) -> list[ToolCallDeltaEvent]:
    return [
        ToolCallDeltaEvent(
            tool_call_id=tool_call_id, tool_name=tool_name, args_text_delta=f,
        )
        for f in fragments
    ]


def one_of_each_event() -> list:
    """One instance of every known provider event kind."""
    return [
        ReasoningDeltaEvent(text_delta="thinking"),
        SourceEvent(source={"sourceType": "url", "id": "s1", "url": "https://example.com"}),
        TextDeltaEvent(text_delta="Hello"),
        ToolCallDeltaEvent(tool_call_id="t1", tool_name="weather", args_text_delta='{"city":'),
        ToolCallEvent(tool_call_id="t1", tool_name="weather", args={"city": "Oslo"}),
        ToolResultEvent(tool_call_id="t1", tool_name="weather", result={"temp": 3}),
        ResponseMetadataEvent(id="resp_1", model_id="gpt-4o"),
        StepFinishEvent(finish_reason="tool-calls", is_continued=False),
        FinishEvent(finish_reason="stop", usage={"promptTokens": 10, "completionTokens": 5}),
        ErrorEvent(error="rate limited"),
        AnnotationsEvent(annotations=[{"kind": "note"}]),
        DataEvent(data=[{"progress": 0.5}]),
    ]


@pytest.fixture
def conversation():
    """``[u1(user), a1(assistant), a2(assistant), u2(user)]``."""
    return [
        UIMessage(id="u1", role=MessageRole.USER, content="What's the weather?"),
        UIMessage(id="a1", role=MessageRole.ASSISTANT, content="Checking."),
        UIMessage(id="a2", role=MessageRole.ASSISTANT, content="It's 3 degrees."),
        UIMessage(id="u2", role=MessageRole.USER, content="Thanks"),
    ]


@pytest.fixture
def make_source():
    return FakeEventSource


@pytest.fixture
def unknown_event():
    return UnknownEvent()


@pytest.fixture
def make_tool_call_deltas():
    return tool_call_deltas


@pytest.fixture
def all_event_kinds():
    return one_of_each_event()

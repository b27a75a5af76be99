from enum import Enum

from pydantic import BaseModel, field_serializer

from chunkwire.errors import AnchorNotFoundError


class MessageRole(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    DATA = "data"


class UIMessage(BaseModel):
    id: str
    role: MessageRole
    content: str = ""

    @field_serializer('role')
    def serialize_role(self, role: MessageRole, _info) -> str:
        return role.value


def slice_messages_until(
    messages: list[UIMessage],
    message_id: str | None,
) -> list[UIMessage]:
    """Return the conversation prefix ending at *message_id*.

    The prefix is extended over any assistant messages directly after
    the anchor, so a multi-part assistant reply is never cut in half.

    Raises:
        AnchorNotFoundError: If *message_id* is set but not in *messages*.
    """
    if message_id is None:
        return []

    idx = next(
        (i for i, m in enumerate(messages) if m.id == message_id), None
    )
    if idx is None:
        raise AnchorNotFoundError(message_id)

    while idx + 1 < len(messages) and messages[idx + 1].role == MessageRole.ASSISTANT:
        idx += 1

    return messages[:idx + 1]

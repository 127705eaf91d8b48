from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class MessageRole(str, Enum):
    """Speaker of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"
    ERROR = "error"


class Message(BaseModel):
    """A single entry in the chat transcript.

    Attributes:
        role: Who produced the message (user, assistant, or error).
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str


class ChatQuery(BaseModel):
    """Request payload for the relay endpoint.

    Attributes:
        query: The user's error description. Must be a non-empty string.
    """

    query: StrictStr = Field(..., min_length=1)


class ChatAnswer(BaseModel):
    """Normalized success payload returned by the relay."""

    answer: str


class RelayError(BaseModel):
    """Normalized failure payload returned by the relay.

    Attributes:
        error: Human-readable message, or the upstream's error body verbatim.
        status: Original upstream status code, present only for upstream failures.
    """

    error: Any
    status: int | None = None


class JsonBody(BaseModel):
    """Upstream body declared as JSON."""

    kind: Literal["json"] = "json"
    value: Any


class TextBody(BaseModel):
    """Upstream body read as plain text."""

    kind: Literal["text"] = "text"
    value: str


UpstreamBody = JsonBody | TextBody

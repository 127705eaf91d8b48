"""Pydantic models for relay payloads and the chat transcript.

Provides type safety and validation for both sides of the relay.

Models:
    - Message / MessageRole: Transcript entries shown in the chat UI
    - ChatQuery: Incoming relay request payload
    - ChatAnswer / RelayError: Normalized relay responses
    - JsonBody / TextBody: Upstream body variants chosen by content type
"""

from src.models.schemas import (
    ChatAnswer,
    ChatQuery,
    JsonBody,
    Message,
    MessageRole,
    RelayError,
    TextBody,
    UpstreamBody,
)

__all__ = [
    "ChatAnswer",
    "ChatQuery",
    "JsonBody",
    "Message",
    "MessageRole",
    "RelayError",
    "TextBody",
    "UpstreamBody",
]

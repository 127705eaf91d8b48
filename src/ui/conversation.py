"""Conversation state and controller for the chat UI.

State changes go through small pure functions that take a
ConversationState and return a new one. ConversationController applies
them, performs the relay round-trip, and notifies listeners such as the
NiceGUI page, which only re-renders from the state it is handed.
"""

import logging
from collections.abc import Awaitable, Callable

from pydantic import BaseModel, ConfigDict

from src.models.schemas import Message, MessageRole

logger = logging.getLogger(__name__)

NO_RESPONSE_FALLBACK = "No response received"
COLD_START_HINT = "The API may be waking up (takes 30-60 seconds on first request)."


class RelayCallError(Exception):
    """Raised when a relay round-trip fails; the message describes why."""

    pass


class ConversationState(BaseModel):
    """Snapshot of the chat transcript and its flags.

    Attributes:
        messages: Transcript in display order.
        error: Description of the last failure, if any.
        busy: Whether a submission is awaiting its response.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = ()
    error: str | None = None
    busy: bool = False


def _append(state: ConversationState, role: MessageRole, content: str) -> tuple[Message, ...]:
    return (*state.messages, Message(role=role, content=content))


def begin_submission(state: ConversationState, text: str) -> ConversationState:
    """Record the user's message and mark the conversation busy."""
    return state.model_copy(
        update={
            "messages": _append(state, MessageRole.USER, text),
            "error": None,
            "busy": True,
        }
    )


def complete_submission(state: ConversationState, answer: str | None) -> ConversationState:
    """Append the assistant's answer and release the busy flag."""
    return state.model_copy(
        update={
            "messages": _append(state, MessageRole.ASSISTANT, answer or NO_RESPONSE_FALLBACK),
            "busy": False,
        }
    )


def fail_submission(state: ConversationState, description: str) -> ConversationState:
    """Append an error message with the cold-start hint and release the busy flag."""
    return state.model_copy(
        update={
            "messages": _append(
                state, MessageRole.ERROR, f"Error: {description}. {COLD_START_HINT}"
            ),
            "error": description,
            "busy": False,
        }
    )


def clear_conversation(state: ConversationState) -> ConversationState:
    """Empty the transcript and drop any error. The busy flag is untouched."""
    return state.model_copy(update={"messages": (), "error": None})


SendQuery = Callable[[str], Awaitable[str | None]]
Listener = Callable[[ConversationState], None]


class ConversationController:
    """Drives one relay round-trip per submission.

    Does not block overlapping submissions; callers are expected to gate
    on ``state.busy``. There is no cancellation: a response that settles
    after ``clear()`` is still appended.
    """

    def __init__(self, send_query: SendQuery) -> None:
        """Initialize the controller.

        Args:
            send_query: Async callable that relays a query and returns the
                answer text (or None). Raises RelayCallError on failure.
        """
        self._send_query = send_query
        self._state = ConversationState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ConversationState:
        return self._state

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with the new state after every change."""
        self._listeners.append(listener)

    def _set_state(self, state: ConversationState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)

    async def submit(self, text: str) -> ConversationState:
        """Send a user message and record the outcome.

        Whitespace-only input is ignored without a network call.

        Args:
            text: Raw text from the input box.

        Returns:
            The state after the round-trip settles.
        """
        query = text.strip()
        if not query:
            return self._state

        self._set_state(begin_submission(self._state, query))

        try:
            answer = await self._send_query(query)
        except RelayCallError as e:
            logger.warning(f"Chat round-trip failed: {e}")
            self._set_state(fail_submission(self._state, str(e)))
        except Exception as e:
            logger.error(f"Unexpected error during chat round-trip: {e!r}")
            self._set_state(fail_submission(self._state, str(e) or type(e).__name__))
        else:
            self._set_state(complete_submission(self._state, answer))

        return self._state

    def clear(self) -> ConversationState:
        """Empty the transcript and clear the error flag."""
        self._set_state(clear_conversation(self._state))
        return self._state

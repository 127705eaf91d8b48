"""Unit tests for the conversation state transitions and controller."""

import asyncio

import pytest_check as check

from src.models.schemas import Message, MessageRole
from src.ui.conversation import (
    COLD_START_HINT,
    NO_RESPONSE_FALLBACK,
    ConversationController,
    ConversationState,
    RelayCallError,
    begin_submission,
    clear_conversation,
    complete_submission,
    fail_submission,
)


class FakeRelay:
    """Async stand-in for the relay client that records queries."""

    def __init__(self, answer: str | None = "Unify the head first.", error: str | None = None):
        self.answer = answer
        self.error = error
        self.queries: list[str] = []

    async def __call__(self, query: str) -> str | None:
        self.queries.append(query)
        if self.error is not None:
            raise RelayCallError(self.error)
        return self.answer


def roles(state: ConversationState) -> list[MessageRole]:
    return [m.role for m in state.messages]


class TestTransitions:
    """Tests for the pure state-transition functions."""

    def test_begin_submission_appends_user_and_sets_busy(self) -> None:
        start = ConversationState(error="old failure")

        state = begin_submission(start, "syntax error")

        check.equal(state.messages, (Message(role=MessageRole.USER, content="syntax error"),))
        check.is_true(state.busy)
        check.is_none(state.error)
        check.equal(start.messages, ())

    def test_complete_submission_uses_fallback_for_missing_answer(self) -> None:
        for answer in (None, ""):
            state = complete_submission(ConversationState(busy=True), answer)

            check.equal(state.messages[-1].content, NO_RESPONSE_FALLBACK)
            check.is_false(state.busy)

    def test_fail_submission_embeds_description_and_hint(self) -> None:
        state = fail_submission(ConversationState(busy=True), "API returned 502")

        check.equal(state.messages[-1].role, MessageRole.ERROR)
        check.equal(
            state.messages[-1].content,
            "Error: API returned 502. The API may be waking up "
            "(takes 30-60 seconds on first request).",
        )
        check.is_in(COLD_START_HINT, state.messages[-1].content)
        check.equal(state.error, "API returned 502")
        check.is_false(state.busy)

    def test_clear_conversation_empties_transcript_and_error(self) -> None:
        state = ConversationState(
            messages=(Message(role=MessageRole.USER, content="hi"),),
            error="boom",
        )

        cleared = clear_conversation(state)

        check.equal(cleared.messages, ())
        check.is_none(cleared.error)


class TestControllerSubmit:
    """Tests for ConversationController.submit."""

    async def test_empty_input_is_ignored(self) -> None:
        """Blank input changes nothing and makes no relay call."""
        relay = FakeRelay()
        controller = ConversationController(relay)

        for text in ("", "   ", "\n\t "):
            await controller.submit(text)

        check.equal(controller.state, ConversationState())
        check.equal(relay.queries, [])

    async def test_success_appends_user_then_assistant(self) -> None:
        relay = FakeRelay(answer="Check the clause order.")
        controller = ConversationController(relay)

        state = await controller.submit("  infinite recursion  ")

        check.equal(roles(state), [MessageRole.USER, MessageRole.ASSISTANT])
        check.equal(state.messages[0].content, "infinite recursion")
        check.equal(state.messages[1].content, "Check the clause order.")
        check.is_false(state.busy)
        check.is_none(state.error)
        check.equal(relay.queries, ["infinite recursion"])

    async def test_failure_appends_user_then_error(self) -> None:
        relay = FakeRelay(error="API returned 500")
        controller = ConversationController(relay)

        state = await controller.submit("CORS error in my API")

        check.equal(roles(state), [MessageRole.USER, MessageRole.ERROR])
        check.equal(state.error, "API returned 500")
        check.is_false(state.busy)

    async def test_unexpected_exception_becomes_error_message(self) -> None:
        """A relay callable raising something other than RelayCallError still settles."""

        async def broken_relay(query: str) -> str:
            raise RuntimeError("relay client exploded")

        controller = ConversationController(broken_relay)

        state = await controller.submit("hi")

        check.equal(roles(state), [MessageRole.USER, MessageRole.ERROR])
        check.equal(state.error, "relay client exploded")
        check.is_false(state.busy)
        check.is_in(COLD_START_HINT, state.messages[-1].content)

    async def test_exception_without_message_uses_type_name(self) -> None:
        async def broken_relay(query: str) -> str:
            raise KeyError()

        state = await ConversationController(broken_relay).submit("hi")

        check.equal(state.error, "KeyError")
        check.is_false(state.busy)

    async def test_next_submission_clears_previous_error(self) -> None:
        relay = FakeRelay(error="Connection failed")
        controller = ConversationController(relay)
        await controller.submit("first")

        relay.error = None
        state = await controller.submit("second")

        check.is_none(state.error)
        check.equal(
            roles(state),
            [MessageRole.USER, MessageRole.ERROR, MessageRole.USER, MessageRole.ASSISTANT],
        )

    async def test_busy_while_request_in_flight(self) -> None:
        release = asyncio.Event()
        seen: list[bool] = []

        async def slow_relay(query: str) -> str:
            await release.wait()
            return "done"

        controller = ConversationController(slow_relay)
        task = asyncio.create_task(controller.submit("hang on"))
        await asyncio.sleep(0)
        seen.append(controller.state.busy)

        release.set()
        await task
        seen.append(controller.state.busy)

        check.equal(seen, [True, False])

    async def test_late_response_after_clear_is_appended(self) -> None:
        release = asyncio.Event()

        async def slow_relay(query: str) -> str:
            await release.wait()
            return "late answer"

        controller = ConversationController(slow_relay)
        task = asyncio.create_task(controller.submit("question"))
        await asyncio.sleep(0)

        controller.clear()
        release.set()
        state = await task

        check.equal(roles(state), [MessageRole.ASSISTANT])
        check.equal(state.messages[0].content, "late answer")


class TestControllerClear:
    """Tests for ConversationController.clear and listeners."""

    async def test_clear_resets_transcript_and_error(self) -> None:
        controller = ConversationController(FakeRelay(error="API returned 502"))
        await controller.submit("oops")

        state = controller.clear()

        check.equal(state.messages, ())
        check.is_none(state.error)

    def test_clear_on_empty_state(self) -> None:
        controller = ConversationController(FakeRelay())

        state = controller.clear()

        check.equal(state.messages, ())
        check.is_none(state.error)

    async def test_listeners_notified_on_each_transition(self) -> None:
        controller = ConversationController(FakeRelay())
        snapshots: list[ConversationState] = []
        controller.subscribe(snapshots.append)

        await controller.submit("hello")
        controller.clear()

        check.equal([s.busy for s in snapshots], [True, False, False])
        check.equal([len(s.messages) for s in snapshots], [1, 2, 0])

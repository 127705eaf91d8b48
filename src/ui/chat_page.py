"""NiceGUI chat interface for the Prolog Debugging Assistant."""

import html
import os

from nicegui import ui

from src.models.schemas import Message, MessageRole
from src.ui.conversation import ConversationController, ConversationState
from src.ui.relay_client import fetch_answer

APP_TITLE = "Prolog Debugging Assistant"

# Enter alone submits; Shift+Enter still inserts a newline
SUBMIT_KEY_EVENT = "keydown.enter.exact.prevent"

EXAMPLE_PROMPTS = [
    "Cannot read property of undefined",
    "CORS error in my API",
    "React state not updating",
]

ROLE_LABELS = {
    MessageRole.USER: "You",
    MessageRole.ASSISTANT: "Assistant",
    MessageRole.ERROR: "Error",
}

ROLE_BUBBLES = {
    MessageRole.USER: "message-user",
    MessageRole.ASSISTANT: "message-assistant",
    MessageRole.ERROR: "message-error",
}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body {
        background: linear-gradient(135deg, #3b0764 0%, #4c1d95 50%, #3b0764 100%);
        min-height: 100vh;
    }

    .app-container {
        background: rgba(88, 28, 135, 0.3);
        border: 1px solid #7e22ce;
        border-radius: 16px;
        box-shadow: 0 8px 24px rgba(0, 0, 0, 0.35);
        overflow: hidden;
    }

    .header { background: linear-gradient(90deg, #9333ea 0%, #7c3aed 100%); }

    .message-user {
        background: linear-gradient(90deg, #9333ea 0%, #7c3aed 100%);
        color: white;
        border-radius: 16px;
    }

    .message-assistant {
        background: rgba(107, 33, 168, 0.5);
        color: #f3e8ff;
        border: 1px solid #7e22ce;
        border-radius: 16px;
    }

    .message-error {
        background: rgba(127, 29, 29, 0.5);
        color: #fecaca;
        border: 1px solid #b91c1c;
        border-radius: 16px;
    }

    .message-body { font-family: 'Menlo', 'Monaco', monospace; white-space: pre-wrap; }

    .error-banner {
        background: rgba(127, 29, 29, 0.3);
        border: 1px solid #b91c1c;
        border-radius: 8px;
        color: #fecaca;
    }

    .input-box {
        background: rgba(88, 28, 135, 0.5);
        border: 1px solid #7e22ce;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #a855f7; }
    .input-box textarea { color: #f3e8ff !important; }

    .send-btn { background: linear-gradient(90deg, #9333ea 0%, #7c3aed 100%) !important; }
</style>
"""


def format_message(content: str) -> str:
    """Escape message text for HTML display, keeping its line breaks."""
    return html.escape(content).replace("\n", "<br>")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    controller = ConversationController(fetch_answer)

    scroll_area: ui.scroll_area
    messages_container: ui.column
    error_banner: ui.element
    error_label: ui.label
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(msg: Message) -> None:
        is_user = msg.role == MessageRole.USER
        align = "justify-end" if is_user else "justify-start"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes(f"max-w-[80%] gap-1 px-4 py-3 {ROLE_BUBBLES[msg.role]}"):
                ui.label(ROLE_LABELS[msg.role]).classes("text-sm font-semibold opacity-75")
                ui.html(format_message(msg.content), sanitize=False).classes(
                    "text-sm message-body"
                )

    def render_empty_state() -> None:
        with ui.column().classes("w-full items-center gap-2 mt-16 text-purple-300"):
            ui.icon("error_outline").classes("text-6xl opacity-50")
            ui.label("No messages yet. Ask about an error!").classes("text-lg")
            ui.label("Try asking:").classes("mt-6 text-sm font-semibold text-purple-200")
            for prompt in EXAMPLE_PROMPTS:
                ui.label(f'"{prompt}"').classes("text-sm")

    def render_thinking() -> None:
        with ui.row().classes("w-full justify-start"):
            with ui.row().classes("message-assistant px-4 py-3 items-center gap-2"):
                ui.spinner(size="sm", color="purple-4")
                ui.label("Thinking... (first request may take 60 seconds)").classes(
                    "text-sm text-purple-300"
                )

    def update_send_button() -> None:
        if controller.state.busy or not (input_field.value or "").strip():
            send_btn.disable()
        else:
            send_btn.enable()

    def refresh(state: ConversationState) -> None:
        messages_container.clear()
        with messages_container:
            if not state.messages:
                render_empty_state()
            for msg in state.messages:
                render_message(msg)
            if state.busy:
                render_thinking()

        error_label.set_text(state.error or "")
        error_banner.set_visibility(state.error is not None)
        update_send_button()
        scroll_area.scroll_to(percent=1.0)

    async def send_message() -> None:
        text = input_field.value or ""
        if controller.state.busy or not text.strip():
            return

        input_field.value = ""
        state = await controller.submit(text)
        if state.error:
            ui.notify(state.error, type="negative")

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container gap-0").style(
            "height: 90vh"
        ),
    ):
        # Header
        with ui.column().classes("w-full header px-6 py-5 gap-1"):
            ui.label(APP_TITLE).classes("text-3xl font-bold text-white")
            ui.label("Ask about frontend, backend, or fullstack development errors").classes(
                "text-sm text-purple-100"
            )

        # Messages
        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            messages_container = ui.column().classes("w-full p-6 gap-4")

        # Input
        with ui.column().classes("w-full p-6 gap-3 border-t border-purple-700"):
            with ui.row().classes("w-full error-banner p-3 text-sm") as error_banner:
                ui.label("Connection Issue:").classes("font-bold")
                error_label = ui.label()

            with ui.row().classes("w-full gap-3 items-start no-wrap"):
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    input_field = (
                        ui.textarea(
                            placeholder="Describe your error or paste error message...",
                            on_change=lambda _: update_send_button(),
                        )
                        .props("borderless dense rows=2 dark")
                        .classes("w-full")
                        .on(SUBMIT_KEY_EVENT, send_message)
                    )
                with ui.column().classes("gap-2"):
                    send_btn = (
                        ui.button(icon="send", on_click=send_message)
                        .props("unelevated")
                        .classes("send-btn text-white")
                    )
                    ui.button(icon="delete", on_click=controller.clear).props(
                        "flat color=purple-3"
                    )

            ui.label(
                "Tip: Paste the exact error message only (no code needed). "
                "The Prolog assistant is trained on common errors."
            ).classes("w-full text-xs text-purple-400 text-center")

    controller.subscribe(refresh)
    refresh(controller.state)


def main() -> None:
    ui.run(title=APP_TITLE, port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()

"""NiceGUI chat widget with SSE streaming support."""

import html
from collections.abc import Callable
from datetime import datetime

from nicegui import ui

from clinic_chat.config import get_settings
from clinic_chat.ui.markdown import markdown_to_html
from clinic_chat.ui.session import ChatSession

WELCOME_MESSAGE = (
    "Hi! 👋 I'm the clinic assistant. Ask me anything about our services, hours, "
    "location, or how to book an appointment."
)

SUGGESTIONS = [
    "What are your opening hours?",
    "Where is the clinic located?",
    "How do I book an appointment?",
    "Which treatments do you offer?",
]

HEAD_HTML = '<link rel="stylesheet" href="/static/chat.css">'


def _now() -> str:
    return datetime.now().strftime("%H:%M")


class _HtmlBubble:
    """ReplyBubble backed by a ui.html element."""

    def __init__(self, element: ui.html, on_change: Callable[[], None]) -> None:
        self._element = element
        self._on_change = on_change

    def render_markdown(self, text: str) -> None:
        self._element.set_content(markdown_to_html(text))
        self._on_change()

    def show_text(self, text: str) -> None:
        self._element.set_content(html.escape(text))
        self._on_change()


class ChatPageView:
    """ChatView that paints messages into the page's message column."""

    def __init__(
        self,
        messages: ui.column,
        typing_row: ui.row,
        send_btn: ui.button,
        scroll: ui.scroll_area,
    ) -> None:
        self._messages = messages
        self._typing_row = typing_row
        self._send_btn = send_btn
        self._scroll = scroll

    def scroll_to_bottom(self) -> None:
        self._scroll.scroll_to(percent=1.0)

    def _bubble_row(self, is_user: bool) -> ui.html:
        role = "user" if is_user else "bot"
        with self._messages, ui.row().classes(f"msg-row {role} w-full gap-2 items-end no-wrap"):
            ui.label("🙂" if is_user else "🦷").classes("msg-avatar")
            with ui.column().classes("gap-1"):
                bubble = ui.html("", sanitize=False).classes(f"bubble {role}-bubble")
                ui.label(_now()).classes("msg-time")
        return bubble

    def show_bot_message(self, text: str) -> None:
        self._bubble_row(is_user=False).set_content(markdown_to_html(text))
        self.scroll_to_bottom()

    def show_user_message(self, text: str) -> None:
        self._bubble_row(is_user=True).set_content(html.escape(text).replace("\n", "<br>"))
        self.scroll_to_bottom()

    def open_reply_bubble(self) -> _HtmlBubble:
        return _HtmlBubble(self._bubble_row(is_user=False), self.scroll_to_bottom)

    def set_typing(self, visible: bool) -> None:
        self._typing_row.set_visibility(visible)
        if visible:
            self.scroll_to_bottom()

    def set_send_enabled(self, enabled: bool) -> None:
        if enabled:
            self._send_btn.enable()
        else:
            self._send_btn.disable()


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(HEAD_HTML)
    session = ChatSession(get_settings().api_base_url)

    input_field: ui.textarea
    view: ChatPageView

    async def submit(text: str) -> None:
        if not text.strip() or session.is_streaming:
            return
        input_field.value = ""
        await session.send(text, view)

    async def send_from_input() -> None:
        await submit(input_field.value or "")

    with ui.column().classes("chat-shell w-full max-w-2xl mx-auto"):
        with ui.row().classes("chat-header w-full items-center gap-3"):
            ui.label("🦷").classes("text-2xl")
            with ui.column().classes("gap-0"):
                ui.label("Clinic Assistant").classes("text-lg font-semibold")
                ui.label("Usually replies instantly").classes("text-xs opacity-80")

        with ui.scroll_area().classes("chat-messages w-full") as scroll:
            messages = ui.column().classes("w-full gap-3")
            with ui.row().classes("typing-indicator items-center gap-1") as typing_row:
                for _ in range(3):
                    ui.element("div").classes("typing-dot")
            typing_row.set_visibility(False)

        with ui.row().classes("suggestions w-full gap-2"):
            for question in SUGGESTIONS:
                ui.button(question, on_click=lambda q=question: submit(q)).props(
                    "outline rounded dense no-caps"
                ).classes("chip")

        with ui.row().classes("chat-input w-full items-end gap-2 no-wrap"):
            input_field = (
                ui.textarea(placeholder="Type your question...")
                .props("autogrow borderless dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_from_input)
            )
            send_btn = ui.button(icon="send", on_click=send_from_input).props(
                "round unelevated"
            ).classes("send-btn")

    view = ChatPageView(messages, typing_row, send_btn, scroll)
    view.show_bot_message(WELCOME_MESSAGE)

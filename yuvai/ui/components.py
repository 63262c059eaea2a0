"""Chat bubbles and avatars."""

from nicegui import ui

from yuvai.models.schemas import ChatMessage, MessageKind, message_kind

DUCK_EMOJI = "🦆"


def render_avatar(avatar: str | None, is_bot: bool) -> None:
    with ui.element("div").classes(
        "w-10 h-10 rounded-full flex items-center justify-center text-lg shadow-sm "
        "flex-shrink-0 overflow-hidden avatar-bubble"
    ):
        if is_bot and avatar == "duck":
            ui.label(DUCK_EMOJI).classes("text-2xl")
        elif avatar and avatar.startswith("data:image"):
            ui.image(avatar).classes("w-full h-full object-cover")
        else:
            ui.label(avatar or "👤")


def _render_text(text: str) -> None:
    ui.label(text).classes("whitespace-pre-wrap text-sm leading-relaxed")


def _render_image(image: str) -> None:
    ui.image(image).classes("rounded-lg mb-2 max-w-full max-h-64").props("fit=contain")


def _render_pending() -> None:
    with ui.row().classes("items-center gap-1"):
        for _ in range(3):
            ui.element("div").classes("typing-dot")


def render_message(
    message: ChatMessage | None,
    bot_avatar: str,
    user_avatar: str | None,
) -> None:
    """Render one bubble. Pass ``None`` for the pending indicator."""
    kind = message_kind(message)
    is_user = kind in (MessageKind.USER_TEXT, MessageKind.USER_IMAGE)
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-model"

    with ui.row().classes(f"w-full {align} gap-3 items-end no-wrap"):
        if not is_user:
            render_avatar(bot_avatar, is_bot=True)
        with ui.element("div").classes(f"px-4 py-2 rounded-2xl shadow-md max-w-[70%] {bubble}"):
            match kind:
                case MessageKind.USER_TEXT | MessageKind.MODEL_TEXT:
                    _render_text(message.text)
                case MessageKind.USER_IMAGE | MessageKind.MODEL_IMAGE:
                    _render_image(message.image)
                    if message.text:
                        _render_text(message.text)
                case MessageKind.PENDING:
                    _render_pending()
        if is_user:
            render_avatar(user_avatar, is_bot=False)

"""NiceGUI pages: start screen, onboarding chat, and main chat."""

import logging

from nicegui import app, events, ui
from pydantic import ValidationError

from yuvai.agent.gateway import get_gateway
from yuvai.media.images import ImageParseError, image_to_data_url
from yuvai.models.schemas import ACCENT_COLORS, DEFAULT_BOT_AVATAR, Theme, UserProfile
from yuvai.session.chat import ChatSession, SubmitOutcome
from yuvai.session.context import SessionContext
from yuvai.session.onboarding import OnboardingStep, OnboardingWizard
from yuvai.session.store import SessionStore
from yuvai.ui.components import DUCK_EMOJI, render_message
from yuvai.ui.theme import apply_theme

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Nunito:wght@400;600;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Nunito', sans-serif; }

    body {
        min-height: 100vh;
        background: linear-gradient(135deg, #fdf2f8 0%, #eff6ff 100%);
    }
    body.body--dark { background: linear-gradient(135deg, #1e1b4b 0%, #0f172a 100%); }

    .message-user {
        background: var(--accent-color);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-model {
        background: #ffffff;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .body--dark .message-model { background: #334155; color: #f1f5f9; }

    .avatar-bubble { background: #fbcfe8; }

    .typing-dot {
        width: 8px; height: 8px;
        background: var(--accent-color-disabled);
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        border-radius: 9999px;
        border: 1px solid #e5e7eb;
        transition: box-shadow 0.2s;
    }
    .input-box:focus-within { box-shadow: 0 0 0 2px var(--accent-color-ring); }

    .accent-btn { background: var(--accent-color) !important; color: white !important; }
    .accent-btn:hover { background: var(--accent-color-hover) !important; }
    .accent-btn:disabled { background: var(--accent-color-disabled) !important; }

    .accent-outline { border: 2px solid var(--accent-color); color: var(--accent-color); }
    .accent-text { color: var(--accent-color); }
</style>
"""


@ui.page("/")
def index_page() -> None:
    """Main page. Switches between start, onboarding and chat views."""
    ui.add_head_html(CUSTOM_CSS)
    dark_mode = ui.dark_mode()
    context = SessionContext(SessionStore(app.storage.user))

    root = ui.column().classes("w-full max-w-3xl mx-auto p-4").style("height: 100vh")

    def refresh_theme() -> None:
        accent, theme = context.active_theme()
        apply_theme(accent, theme, dark_mode)

    # === Start screen ===

    def show_start() -> None:
        root.clear()

        def toggle_theme() -> None:
            context.toggle_theme()
            refresh_theme()

        with root, ui.column().classes("w-full h-full items-center justify-center gap-16"):
            with ui.column().classes("items-center gap-8"):
                ui.button(DUCK_EMOJI, on_click=toggle_theme).props(
                    "flat round size=60px aria-label='Toggle theme'"
                )
                ui.label("YuvAi").classes("text-4xl font-bold accent-text")
            ui.button("Get Started", on_click=show_onboarding).classes(
                "w-full max-w-sm rounded-full py-3 font-semibold accent-outline"
            ).props("flat no-caps")

    # === Onboarding ===

    async def show_onboarding() -> None:
        root.clear()

        messages_container: ui.column
        footer: ui.column

        def on_accent_change(color: str) -> None:
            context.set_pre_login_accent(color)
            refresh_theme()

        def on_complete(profile: UserProfile) -> None:
            context.login(profile)
            refresh_theme()
            show_chat()

        def refresh_messages() -> None:
            messages_container.clear()
            with messages_container:
                for msg in wizard.messages:
                    render_message(msg, DEFAULT_BOT_AVATAR, wizard.avatar_image)
                if wizard.is_loading:
                    render_message(None, DEFAULT_BOT_AVATAR, wizard.avatar_image)

        async def handle_avatar_upload(e: events.UploadEventArguments) -> None:
            try:
                data_url = image_to_data_url(await e.file.read(), e.file.content_type)
            except ImageParseError as err:
                logger.warning(f"Rejected avatar upload {e.file.name}: {err}")
                ui.notify(str(err), type="negative")
                return
            await wizard.submit_avatar(data_url)

        def render_footer() -> None:
            footer.clear()
            with footer:
                if wizard.error:
                    ui.label(wizard.error).classes("text-red-500 text-center text-sm w-full")

                match wizard.step:
                    case OnboardingStep.NAME | OnboardingStep.AGE:
                        render_text_input()
                    case OnboardingStep.COLOR:
                        with ui.row().classes("w-full justify-center gap-4 p-4"):
                            for color in ACCENT_COLORS:
                                ui.button(
                                    on_click=lambda c=color: wizard.select_color(c)
                                ).props(
                                    f"round size=md aria-label='Select {color.name} color'"
                                ).style(f"background: {color.hex} !important").set_enabled(
                                    not wizard.is_loading
                                )
                    case OnboardingStep.AVATAR:
                        with ui.row().classes("w-full items-center gap-3 p-4"):
                            ui.upload(
                                label="Upload Photo",
                                auto_upload=True,
                                max_files=1,
                                on_upload=handle_avatar_upload,
                            ).props("accept=image/* flat").classes("flex-1")
                            ui.button(
                                "Skip", on_click=lambda: wizard.submit_avatar(None)
                            ).classes("flex-1 rounded-full").props("flat no-caps")
                    case OnboardingStep.DONE:
                        pass

        def render_text_input() -> None:
            async def submit() -> None:
                await wizard.submit_text(input_field.value or "")

            props = "borderless dense autofocus"
            if wizard.step is OnboardingStep.AGE:
                props += " type=number"

            with ui.row().classes("w-full input-box items-center gap-2 px-3 py-1 no-wrap"):
                input_field = (
                    ui.input()
                    .props(props)
                    .classes("flex-grow")
                    .on("keydown.enter", submit)
                )
                input_field.set_enabled(not wizard.is_loading)
                ui.button(icon="send", on_click=submit).props("round unelevated").classes(
                    "accent-btn"
                ).bind_enabled_from(input_field, "value", lambda v: bool(str(v or "").strip()))

        def on_change() -> None:
            refresh_messages()
            render_footer()

        wizard = OnboardingWizard(
            theme=context.pre_login_theme,
            on_change=on_change,
            on_accent_change=on_accent_change,
            on_complete=on_complete,
        )

        with root:
            with ui.scroll_area().classes("flex-grow w-full"):
                messages_container = ui.column().classes("w-full gap-4 p-2")
            footer = ui.column().classes("w-full")

        on_change()
        await wizard.start()

    # === Chat ===

    def show_chat() -> None:
        root.clear()
        profile = context.profile
        if profile is None:
            show_start()
            return

        try:
            gateway = get_gateway()
        except ValidationError as e:
            logger.error(f"Gateway is not configured: {e}")
            with root:
                ui.label("YuvAi is not configured yet. Set GEMINI_API_KEY and restart.").classes(
                    "text-red-500 text-center w-full"
                )
            return

        pending_image: str | None = None

        messages_container: ui.column
        error_label: ui.label
        preview_row: ui.row
        input_field: ui.input
        send_btn: ui.button

        def on_logout() -> None:
            context.logout()
            refresh_theme()
            show_start()

        def refresh_messages() -> None:
            messages_container.clear()
            with messages_container:
                for msg in chat.messages:
                    render_message(msg, profile.bot_avatar_id, profile.avatar_image)
                if chat.is_pending:
                    render_message(None, profile.bot_avatar_id, profile.avatar_image)
            error_label.set_text(chat.error or "")
            error_label.set_visibility(bool(chat.error))
            send_btn.set_enabled(not chat.is_pending)

        def refresh_preview() -> None:
            preview_row.clear()
            if pending_image is None:
                return
            with preview_row:
                ui.image(pending_image).classes("h-20 w-20 rounded-md")
                ui.button(icon="close", on_click=remove_image).props(
                    "round dense color=negative size=sm aria-label='Remove image'"
                )

        def remove_image() -> None:
            nonlocal pending_image
            pending_image = None
            refresh_preview()

        async def attach_image(e: events.UploadEventArguments) -> None:
            nonlocal pending_image
            try:
                pending_image = image_to_data_url(await e.file.read(), e.file.content_type)
            except ImageParseError as err:
                ui.notify(str(err), type="negative")
                return
            e.sender.reset()
            refresh_preview()

        async def send_message() -> None:
            nonlocal pending_image
            text = (input_field.value or "").strip()
            image = pending_image
            if chat.is_pending or (not text and not image):
                return

            input_field.value = ""
            pending_image = None
            refresh_preview()

            outcome = await chat.submit(text, image)
            if outcome is SubmitOutcome.FAILED:
                ui.notify(chat.error, type="negative")

        def toggle_theme() -> None:
            current = context.profile or profile
            theme = Theme.LIGHT if current.theme is Theme.DARK else Theme.DARK
            updated = context.update_settings(theme=theme)
            if updated is not None:
                chat.profile = updated
            refresh_theme()

        with root:
            with ui.row().classes("w-full items-center justify-between px-2"):
                with ui.row().classes("items-center gap-2"):
                    ui.label(DUCK_EMOJI).classes("text-3xl")
                    ui.label("YuvAi").classes("text-xl font-bold accent-text")
                with ui.row().classes("items-center gap-1"):
                    ui.button(icon="dark_mode", on_click=toggle_theme).props("flat round")
                    ui.button(icon="logout", on_click=on_logout).props("flat round")

            with ui.scroll_area().classes("flex-grow w-full"):
                messages_container = ui.column().classes("w-full gap-4 p-2")

            error_label = ui.label().classes("text-red-500 text-center text-sm w-full")
            preview_row = ui.row().classes("items-start gap-1")

            with ui.row().classes("w-full input-box items-center gap-2 px-2 py-1 no-wrap"):
                ui.upload(auto_upload=True, max_files=1, on_upload=attach_image).props(
                    "accept=image/* flat dense hide-upload-btn"
                ).classes("w-32")
                input_field = (
                    ui.input(placeholder="Say something nice...")
                    .props("borderless dense")
                    .classes("flex-grow")
                    .on("keydown.enter", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated"
                ).classes("accent-btn")

        chat = ChatSession(profile, gateway, on_change=refresh_messages, on_logout=on_logout)
        refresh_messages()

    context.restore()
    refresh_theme()
    if context.is_logged_in:
        show_chat()
    else:
        show_start()

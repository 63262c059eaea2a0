"""Chat session state for a logged-in user.

Holds the transcript and forwards each user turn to the gateway, one at a
time. Gateway failures become a friendly model message plus an inline
error so the session stays usable.
"""

import logging
from collections.abc import Callable
from enum import Enum

from yuvai.agent.gateway import GatewayError, ResponseGenerator
from yuvai.models.schemas import ChatMessage, MessageRole, UserProfile

logger = logging.getLogger(__name__)

LOGOUT_COMMANDS = frozenset({"exit", "logout"})
ERROR_PREFIX = "Oh no, something went wrong! 🥺 "


class SubmitOutcome(str, Enum):
    """What a call to ChatSession.submit did."""

    IGNORED = "ignored"
    LOGOUT = "logout"
    REPLIED = "replied"
    FAILED = "failed"


def greeting_for(name: str) -> str:
    return (
        f"Hi {name}! I’m YuvAi 👋\n"
        "You can talk to me 💬, show me a picture 📸, or ask me to make or draw "
        "something for you ✏️🎨\n"
        "What do you want to try today?"
    )


def is_logout_command(text: str) -> bool:
    return (text or "").strip().lower() in LOGOUT_COMMANDS


class ChatSession:
    """Manages the transcript and the single in-flight request.

    Attributes:
        profile: The logged-in user's profile (read-only).
        messages: Transcript in submission order, starting with a greeting.
        is_pending: True while a gateway call is outstanding.
        error: Message of the last gateway failure, cleared on the next send.
    """

    def __init__(
        self,
        profile: UserProfile,
        gateway: ResponseGenerator,
        on_change: Callable[[], None] | None = None,
        on_logout: Callable[[], None] | None = None,
    ) -> None:
        self.profile = profile
        self._gateway = gateway
        self._on_change = on_change
        self._on_logout = on_logout

        self.messages: list[ChatMessage] = [
            ChatMessage(role=MessageRole.MODEL, text=greeting_for(profile.name))
        ]
        self.is_pending = False
        self.error: str | None = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self._notify()

    def _fail(self, error: str) -> SubmitOutcome:
        self.error = error or "An unknown error occurred."
        self.is_pending = False
        self._append(ChatMessage(role=MessageRole.MODEL, text=f"{ERROR_PREFIX}{self.error}"))
        return SubmitOutcome.FAILED

    async def submit(self, text: str, image: str | None = None) -> SubmitOutcome:
        """Send one user turn.

        Args:
            text: The typed message.
            image: Optional attached picture as a data URL.

        Returns:
            The outcome. Empty input and calls made while a request is
            pending are ignored without touching the transcript.
        """
        text = (text or "").strip()
        if self.is_pending or (not text and not image):
            return SubmitOutcome.IGNORED

        if is_logout_command(text):
            logger.info(f"Logout requested by {self.profile.name!r}")
            if self._on_logout is not None:
                self._on_logout()
            return SubmitOutcome.LOGOUT

        self.error = None
        self._append(ChatMessage(role=MessageRole.USER, text=text, image=image or None))
        self.is_pending = True
        self._notify()

        try:
            reply = await self._gateway.generate_response(text, image or None, self.profile.age)
        except GatewayError as e:
            logger.warning(f"Gateway failure: {e}")
            return self._fail(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error from gateway: {e}")
            return self._fail(str(e))
        finally:
            # Cancellation must not leave the session locked
            self.is_pending = False

        self._append(reply)
        return SubmitOutcome.REPLIED

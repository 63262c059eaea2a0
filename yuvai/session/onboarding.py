"""Onboarding wizard: a short scripted chat that builds the user profile.

The wizard walks strictly forward through name -> age -> color -> avatar ->
done. Each accepted answer is echoed into the onboarding transcript and
followed by scripted bot lines. Invalid answers set an inline error and
keep the wizard where it is.
"""

import logging
import re
from collections.abc import Callable
from enum import Enum

from yuvai.models.schemas import (
    DEFAULT_ACCENT,
    DEFAULT_BOT_AVATAR,
    AccentColor,
    ChatMessage,
    MessageRole,
    Theme,
    UserProfile,
)
from yuvai.session.pacing import Pacer, ScriptedStep

logger = logging.getLogger(__name__)

NAME_ERROR = "Please enter a name!"
AGE_ERROR = "Please enter a valid age!"
SKIP_AVATAR_TEXT = "I'll skip for now."

GREETING_SCRIPT = (
    ScriptedStep(0.5, "Hey there!"),
    ScriptedStep(1.0, "I'm YuvAi, your new chat buddy!"),
    ScriptedStep(1.0, "What should I call you?"),
)
AGE_SCRIPT = (
    ScriptedStep(1.0, "Great!"),
    ScriptedStep(1.2, "What's your favorite color? Pick one!"),
)
COLOR_SCRIPT = (
    ScriptedStep(1.0, "Ooh, nice choice! ✨"),
    ScriptedStep(1.2, "Lastly, you can upload a profile picture if you like."),
)
HANDOFF_DELAY = 1.5

_AGE_PATTERN = re.compile(r"^\s*([+-]?\d+)")


class OnboardingStep(str, Enum):
    """Wizard states, in order."""

    NAME = "name"
    AGE = "age"
    COLOR = "color"
    AVATAR = "avatar"
    DONE = "done"


def name_script(name: str) -> tuple[ScriptedStep, ...]:
    return (
        ScriptedStep(1.0, f"Nice to meet you, {name}! 👋"),
        ScriptedStep(1.0, "How old are you?"),
    )


def avatar_script(has_avatar: bool) -> tuple[ScriptedStep, ...]:
    return (
        ScriptedStep(0.5),
        ScriptedStep(1.0, "Cute picture! 😊" if has_avatar else "No problem!"),
        ScriptedStep(1.2, "We're all set. Let's start chatting!"),
    )


def parse_age(text: str) -> int | None:
    """Parse an age answer from its leading integer.

    Trailing text is ignored, so "7.5" reads as 7 and "9 years" as 9.

    Returns:
        The age as a positive integer, or None if there is no leading
        integer or it is not positive.
    """
    match = _AGE_PATTERN.match(text or "")
    if match is None:
        return None
    age = int(match.group(1))
    return age if age > 0 else None


class OnboardingWizard:
    """Linear state machine collecting name, age, accent color and avatar.

    Attributes:
        step: Current wizard state.
        visited: Every state entered so far, in order.
        messages: Onboarding transcript, shown only while onboarding.
        error: Validation message for the last rejected answer.
        is_loading: True while scripted lines are still playing; answers
            are ignored meanwhile.
        profile: The finished profile, set once the wizard reaches done.
    """

    def __init__(
        self,
        pacer: Pacer | None = None,
        theme: Theme = Theme.LIGHT,
        on_change: Callable[[], None] | None = None,
        on_accent_change: Callable[[str], None] | None = None,
        on_complete: Callable[[UserProfile], None] | None = None,
    ) -> None:
        self.pacer = pacer or Pacer()
        self.theme = theme
        self._on_change = on_change
        self._on_accent_change = on_accent_change
        self._on_complete = on_complete

        self.step = OnboardingStep.NAME
        self.visited: list[OnboardingStep] = [OnboardingStep.NAME]
        self.messages: list[ChatMessage] = []
        self.error = ""
        self.is_loading = True
        self.profile: UserProfile | None = None

        self.name = ""
        self.age = 0
        self.accent_color = DEFAULT_ACCENT
        self.avatar_image: str | None = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _add_message(self, role: MessageRole, text: str = "", image: str | None = None) -> None:
        self.messages.append(ChatMessage(role=role, text=text, image=image))
        self._notify()

    def _add_bot_message(self, text: str) -> None:
        self._add_message(MessageRole.MODEL, text)

    def _reject(self, error: str) -> bool:
        self.error = error
        self._notify()
        return False

    def _advance(self, step: OnboardingStep) -> None:
        logger.debug(f"Onboarding step {self.step.value} -> {step.value}")
        self.step = step
        self.visited.append(step)

    async def _play(self, steps: tuple[ScriptedStep, ...]) -> None:
        self.is_loading = True
        self._notify()
        try:
            await self.pacer.play(steps, self._add_bot_message)
        finally:
            self.is_loading = False
            self._notify()

    def _accepts(self, step: OnboardingStep) -> bool:
        return self.step is step and not self.is_loading

    async def start(self) -> None:
        """Play the greeting and open the name question."""
        await self._play(GREETING_SCRIPT)

    async def submit_text(self, text: str) -> bool:
        """Route a typed answer to the name or age question."""
        if self.step is OnboardingStep.NAME:
            return await self.submit_name(text)
        if self.step is OnboardingStep.AGE:
            return await self.submit_age(text)
        return False

    async def submit_name(self, text: str) -> bool:
        if not self._accepts(OnboardingStep.NAME):
            return False

        name = (text or "").strip()
        if not name:
            return self._reject(NAME_ERROR)

        self.error = ""
        self.name = name
        self._add_message(MessageRole.USER, name)
        self._advance(OnboardingStep.AGE)
        await self._play(name_script(name))
        return True

    async def submit_age(self, text: str) -> bool:
        if not self._accepts(OnboardingStep.AGE):
            return False

        age = parse_age(text)
        if age is None:
            return self._reject(AGE_ERROR)

        self.error = ""
        self.age = age
        self._add_message(MessageRole.USER, text)
        self._advance(OnboardingStep.COLOR)
        await self._play(AGE_SCRIPT)
        return True

    async def select_color(self, color: AccentColor) -> bool:
        if not self._accepts(OnboardingStep.COLOR):
            return False

        self.accent_color = color.hex
        self._add_message(MessageRole.USER, f"I like {color.name}!")
        if self._on_accent_change is not None:
            self._on_accent_change(color.hex)
        self._advance(OnboardingStep.AVATAR)
        await self._play(COLOR_SCRIPT)
        return True

    async def submit_avatar(self, image: str | None) -> UserProfile | None:
        """Accept an uploaded avatar, or ``None`` to skip.

        Returns:
            The finished profile, or None if the wizard is not at the
            avatar step.
        """
        if not self._accepts(OnboardingStep.AVATAR):
            return None

        self.avatar_image = image or None
        if self.avatar_image:
            self._add_message(MessageRole.USER, image=self.avatar_image)
        else:
            self._add_message(MessageRole.USER, SKIP_AVATAR_TEXT)
        self._advance(OnboardingStep.DONE)
        await self._play(avatar_script(self.avatar_image is not None))
        await self.pacer.clock.sleep(HANDOFF_DELAY)

        self.profile = UserProfile(
            logged_in=True,
            name=self.name,
            age=self.age,
            avatar_image=self.avatar_image,
            bot_avatar_id=DEFAULT_BOT_AVATAR,
            theme=self.theme,
            accent_color=self.accent_color,
        )
        logger.info(f"Onboarding complete for {self.name!r}")
        if self._on_complete is not None:
            self._on_complete(self.profile)
        return self.profile

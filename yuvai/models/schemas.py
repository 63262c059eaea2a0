from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Theme(str, Enum):
    """Light or dark appearance."""

    LIGHT = "light"
    DARK = "dark"


class MessageRole(str, Enum):
    """Who authored a chat message."""

    USER = "user"
    MODEL = "model"


class MessageKind(str, Enum):
    """Rendering variants for a chat bubble."""

    USER_TEXT = "user_text"
    USER_IMAGE = "user_image"
    MODEL_TEXT = "model_text"
    MODEL_IMAGE = "model_image"
    PENDING = "pending"


class ChatMessage(BaseModel):
    """A single message in a transcript.

    Attributes:
        role: The speaker (user or model).
        text: The message text, possibly empty for image-only messages.
        image: Optional image as a base64 data URL.
    """

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    text: str = ""
    image: str | None = None

    @property
    def kind(self) -> MessageKind:
        return message_kind(self)


def message_kind(message: ChatMessage | None) -> MessageKind:
    """Classify a message for rendering. ``None`` means a reply is pending."""
    if message is None:
        return MessageKind.PENDING
    if message.role is MessageRole.USER:
        return MessageKind.USER_IMAGE if message.image else MessageKind.USER_TEXT
    return MessageKind.MODEL_IMAGE if message.image else MessageKind.MODEL_TEXT


class AccentColor(BaseModel):
    """A named accent color offered during onboarding."""

    model_config = ConfigDict(frozen=True)

    name: str
    hex: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")


ACCENT_COLORS: tuple[AccentColor, ...] = (
    AccentColor(name="Violet", hex="#8B5CF6"),
    AccentColor(name="Sky", hex="#38BDF8"),
    AccentColor(name="Emerald", hex="#34D399"),
    AccentColor(name="Rose", hex="#F43F5E"),
    AccentColor(name="Amber", hex="#F59E0B"),
)

DEFAULT_ACCENT = "#F59E0B"
DEFAULT_BOT_AVATAR = "duck"


class UserProfile(BaseModel):
    """The persisted user settings record.

    Field aliases match the keys of the stored JSON snapshot.

    Attributes:
        logged_in: Whether onboarding has completed.
        name: Display name chosen by the user.
        age: Age in years, used to pick the assistant persona.
        avatar_image: Optional profile picture as a data URL.
        bot_avatar_id: Identifier of the mascot shown for model messages.
        theme: Light or dark appearance.
        accent_color: Hex color the palette is derived from.
    """

    model_config = ConfigDict(populate_by_name=True)

    logged_in: bool = Field(True, alias="isLoggedIn")
    name: str = Field(..., min_length=1, alias="userName")
    age: int = Field(..., gt=0, alias="userAge")
    avatar_image: str | None = Field(None, alias="userAvatar")
    bot_avatar_id: str = Field(DEFAULT_BOT_AVATAR, alias="botAvatar")
    theme: Theme = Theme.LIGHT
    accent_color: str = Field(DEFAULT_ACCENT, pattern=r"^#[0-9A-Fa-f]{6}$", alias="accentColor")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip whitespace from the name before validation."""
        if isinstance(v, str):
            return v.strip()
        return v

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

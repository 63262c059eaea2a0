"""Pydantic models for profiles and chat messages.

Provides type safety and validation for everything that crosses the
storage and gateway boundaries.

Models:
    - UserProfile: Persisted user settings snapshot
    - ChatMessage: Individual message in a transcript
    - AccentColor: Named accent color from the onboarding palette
    - MessageKind: Rendering variant of a chat bubble
"""

from yuvai.models.schemas import (
    ACCENT_COLORS,
    DEFAULT_ACCENT,
    DEFAULT_BOT_AVATAR,
    AccentColor,
    ChatMessage,
    MessageKind,
    MessageRole,
    Theme,
    UserProfile,
    message_kind,
)

__all__ = [
    "ACCENT_COLORS",
    "DEFAULT_ACCENT",
    "DEFAULT_BOT_AVATAR",
    "AccentColor",
    "ChatMessage",
    "MessageKind",
    "MessageRole",
    "Theme",
    "UserProfile",
    "message_kind",
]

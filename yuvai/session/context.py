"""Explicit session context for the active browser.

Owns the current profile and the pre-login appearance, and keeps the
stored snapshot in step with both. Created when a page is opened, reset
on logout.
"""

import logging
from typing import Any

from yuvai.models.schemas import DEFAULT_ACCENT, Theme, UserProfile
from yuvai.session.store import SessionStore

logger = logging.getLogger(__name__)


class SessionContext:
    """Profile lifecycle: restore, login, settings changes, logout."""

    def __init__(self, store: SessionStore) -> None:
        self.store = store
        self.profile: UserProfile | None = None
        self.pre_login_theme = Theme.LIGHT
        self.pre_login_accent = DEFAULT_ACCENT

    @property
    def is_logged_in(self) -> bool:
        return self.profile is not None and self.profile.logged_in

    def restore(self) -> UserProfile | None:
        self.profile = self.store.load()
        return self.profile

    def login(self, profile: UserProfile) -> UserProfile:
        self.profile = profile.model_copy(update={"logged_in": True})
        self.store.save(self.profile)
        logger.info(f"Logged in as {self.profile.name!r}")
        return self.profile

    def update_settings(self, **changes: Any) -> UserProfile | None:
        """Merge changes into the active profile and persist it.

        Returns:
            The updated profile, or None when nobody is logged in.

        Raises:
            ValueError: If a change names a field the profile does not have.
            ValidationError: If a changed value is invalid.
        """
        unknown = sorted(set(changes) - set(UserProfile.model_fields))
        if unknown:
            raise ValueError(f"Unknown profile settings: {', '.join(unknown)}")
        if self.profile is None:
            return None
        merged = self.profile.model_dump() | changes
        self.profile = UserProfile.model_validate(merged)
        self.store.save(self.profile)
        return self.profile

    def logout(self) -> None:
        self.store.clear()
        self.profile = None

    def toggle_theme(self) -> Theme:
        self.pre_login_theme = Theme.DARK if self.pre_login_theme is Theme.LIGHT else Theme.LIGHT
        return self.pre_login_theme

    def set_pre_login_accent(self, color: str) -> None:
        self.pre_login_accent = color

    def active_theme(self) -> tuple[str, Theme]:
        """Accent color and theme that should be on screen right now."""
        if self.profile is not None:
            return self.profile.accent_color, self.profile.theme
        return self.pre_login_accent, self.pre_login_theme

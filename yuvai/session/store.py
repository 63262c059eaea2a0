"""Persistence of the single user-profile snapshot.

The snapshot lives in a mutable mapping under one key. In the web app that
mapping is NiceGUI's per-browser ``app.storage.user``; tests pass a dict.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from pydantic import ValidationError

from yuvai.models.schemas import UserProfile

logger = logging.getLogger(__name__)

STORAGE_KEY = "userSettings"


class SessionStore:
    """Load, save, and clear the stored profile."""

    def __init__(self, storage: MutableMapping[str, Any], key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> UserProfile | None:
        """Restore the stored profile.

        Returns:
            The profile, or None if nothing usable is stored. Corrupt or
            incomplete snapshots are removed.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            return None

        try:
            if isinstance(raw, (str, bytes)):
                profile = UserProfile.model_validate_json(raw)
            else:
                profile = UserProfile.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Failed to parse stored user settings, discarding: {e}")
            self.clear()
            return None

        if not profile.logged_in:
            return None
        return profile

    def save(self, profile: UserProfile) -> None:
        self._storage[self._key] = profile.to_json()

    def clear(self) -> None:
        self._storage.pop(self._key, None)

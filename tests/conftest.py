"""Pytest fixtures and shared test configuration.

Fixtures:
    - storage: In-memory stand-in for the browser storage mapping
    - store: SessionStore over that mapping
    - clock / pacer: Virtual clock so scripted pauses never block
    - gateway: Scripted fake of the AI gateway
    - profile: A finished user profile
    - png_bytes / png_data_url: Tiny valid image payloads
    - async_client: HTTPX client for the host API
"""

import asyncio
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from yuvai.api import app
from yuvai.media.images import image_to_data_url
from yuvai.models.schemas import ChatMessage, MessageRole, Theme, UserProfile
from yuvai.session.pacing import Pacer, VirtualClock
from yuvai.session.store import SessionStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 17


class FakeGateway:
    """Records calls and replies from a queue of messages or exceptions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None, int]] = []
        self.replies: list[ChatMessage | Exception] = []
        self.hold: asyncio.Event | None = None

    def reply_with(self, *replies: ChatMessage | Exception) -> "FakeGateway":
        self.replies.extend(replies)
        return self

    async def generate_response(self, prompt: str, image: str | None, age: int) -> ChatMessage:
        self.calls.append((prompt, image, age))
        if self.hold is not None:
            await self.hold.wait()
        reply = self.replies.pop(0) if self.replies else ChatMessage(
            role=MessageRole.MODEL, text=f"echo: {prompt}"
        )
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def storage() -> dict[str, Any]:
    """Return an empty key-value mapping."""
    return {}


@pytest.fixture
def store(storage: dict[str, Any]) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def pacer(clock: VirtualClock) -> Pacer:
    return Pacer(clock)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def profile() -> UserProfile:
    """Return a complete, logged-in profile."""
    return UserProfile(
        logged_in=True,
        name="Mia",
        age=9,
        avatar_image=None,
        bot_avatar_id="duck",
        theme=Theme.LIGHT,
        accent_color="#8B5CF6",
    )


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def png_data_url() -> str:
    return image_to_data_url(PNG_BYTES)


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

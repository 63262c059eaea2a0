"""Scripted message pacing.

Bot messages during onboarding appear one after another with short
artificial pauses. A script is an explicit sequence of timed steps played
by a Pacer over a clock, so tests can swap in a virtual clock and run the
whole wizard without real waiting.
"""

import asyncio
from collections.abc import Callable, Iterable
from typing import NamedTuple, Protocol


class Clock(Protocol):
    async def sleep(self, seconds: float) -> None: ...


class AsyncioClock:
    """Real-time clock backed by the event loop."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class VirtualClock:
    """Clock that advances instantly and records every pause."""

    def __init__(self) -> None:
        self.now: float = 0.0
        self.sleeps: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedStep(NamedTuple):
    """A pause followed by an optional bot line."""

    delay: float
    text: str | None = None


class Pacer:
    """Plays scripted steps in order on a single clock."""

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or AsyncioClock()

    async def play(self, steps: Iterable[ScriptedStep], emit: Callable[[str], None]) -> None:
        for step in steps:
            await self.clock.sleep(step.delay)
            if step.text is not None:
                emit(step.text)

"""Session state: stored profile, onboarding, and chat.

Responsibilities:
    - Persisting the single profile snapshot
    - Scripted onboarding that builds the profile
    - Chat transcript and gateway dispatch
    - Explicit login/logout lifecycle

Contains no UI code. Pages drive these objects and redraw on change.
"""

from yuvai.session.chat import ChatSession, SubmitOutcome
from yuvai.session.context import SessionContext
from yuvai.session.onboarding import OnboardingStep, OnboardingWizard
from yuvai.session.pacing import AsyncioClock, Pacer, ScriptedStep, VirtualClock
from yuvai.session.store import STORAGE_KEY, SessionStore

__all__ = [
    "STORAGE_KEY",
    "AsyncioClock",
    "ChatSession",
    "OnboardingStep",
    "OnboardingWizard",
    "Pacer",
    "ScriptedStep",
    "SessionContext",
    "SessionStore",
    "SubmitOutcome",
    "VirtualClock",
]

"""Test package for YuvAi.

Provides coverage for all components with unit tests for isolated logic
and integration tests for workflows.

Structure:
    - unit/: Individual function and class tests
    - integration/: Onboarding-to-chat workflows and the host app

Scripted pacing runs on a virtual clock, so no test waits in real time.
The AI backend is replaced by fakes or mocks; no network calls are made.
Leverages pytest with pytest-check for soft assertions.
"""

"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation and serialization
    - media/: Image validation and data URL conversion
    - agent/: Gateway configuration, routing and persona selection
    - session/: Store, onboarding wizard, chat session, context
    - ui/: Palette derivation

Uses mocks for the Agno and google-genai backends.
"""

"""NiceGUI interface - thin visualization layer for the chat buddy.

Responsibilities:
    - Start screen with the duck mascot and theme toggle
    - Scripted onboarding chat
    - Chat message display with picture uploads and generated images
    - Accent color palette and dark/light theme

Contains minimal business logic. Delegates to the session package.
"""

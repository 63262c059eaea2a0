"""Integration tests for components working together as a system.

Coverage:
    - Onboarding -> session store -> chat session -> logout
    - Restoring a stored profile on a fresh page load
    - Host API health endpoint with real HTTP requests

The AI gateway is a scripted fake; everything else is real.
"""

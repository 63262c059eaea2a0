"""YuvAi - a friendly chat buddy for kids, powered by Gemini.

Combines NiceGUI for the browser interface, FastAPI as the host server,
Agno + Google GenAI for model calls, and Pydantic for data validation.

Components:
    - agent: Gateway to the hosted generative-AI service
    - api: Host application and health endpoint
    - media: Image upload validation and data URL conversion
    - models: Profile and message schemas
    - session: Session store, onboarding wizard, and chat session state
    - ui: Web pages, chat bubbles, and theming
"""

__version__ = "0.1.0"

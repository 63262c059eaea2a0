"""FastAPI host for the YuvAi web app.

NiceGUI mounts its pages on this application; the API itself only
exposes service health.

Endpoints:
    - GET /health: Service health status
"""

from yuvai.api.app import app, create_app

__all__ = ["app", "create_app"]

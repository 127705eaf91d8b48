"""FastAPI endpoints for the Prolog Debugging Assistant.

Thin HTTP layer in front of the upstream relay.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Relay a query to the debugging assistant backend
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]

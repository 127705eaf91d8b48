"""Prolog Debugging Assistant - chat front end and relay for an error-debugging backend.

Combines FastAPI for the relay endpoint, httpx for upstream calls,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - api: HTTP relay endpoint and health check
    - relay: Upstream configuration, forwarding, and response normalization
    - ui: Conversation controller and chat page
    - models: Transcript and relay payload schemas
"""

__version__ = "0.1.0"

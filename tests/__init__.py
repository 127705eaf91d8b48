"""Test package for the Prolog Debugging Assistant.

Structure:
    - unit/: Relay helpers, configuration, conversation controller, UI client
    - integration/: The FastAPI relay endpoint driven over ASGI

The upstream backend is always faked with httpx.MockTransport; no test
needs network access or a running assistant.
Leverages pytest with pytest-check for soft assertions.
"""

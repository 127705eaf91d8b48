"""Integration tests for the relay API working as a system.

Coverage:
    - POST /api/chat validation, configuration, and upstream classification
    - Health check, method handling, and CORS

Requests go through the real FastAPI app via httpx ASGITransport.
"""

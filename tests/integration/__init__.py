"""Integration tests for the relay as an HTTP service.

Coverage:
    - POST /chat streaming, headers and wire format
    - Degraded paths: missing key, upstream failures, rejected input
    - GET /health and static assets

Runs the real FastAPI app through httpx.ASGITransport. Only the provider
is simulated, so no API key or network access is required.
"""

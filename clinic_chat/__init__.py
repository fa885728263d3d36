"""Clinic Chat - streaming LLM chat widget for a dental clinic website.

Combines FastAPI for HTTP streaming, httpx for the upstream provider call,
NiceGUI for the chat widget, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and SSE responses
    - relay: Upstream request construction and stream re-framing
    - parsing: Shared SSE frame decoding
    - ui: Chat widget and client-side transcript
    - models: Request, turn and stream event schemas
"""

__version__ = "0.1.0"

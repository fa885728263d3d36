"""FastAPI endpoints for the clinic chat relay.

HTTP and streaming routes with async request handling.
Uses Server-Sent Events for real-time reply streaming.

Endpoints:
    - GET /health: Service health and configured model
    - POST /chat: Streamed chat replies
    - GET /static/*: Static assets for the chat page
"""

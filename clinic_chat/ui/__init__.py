"""NiceGUI chat widget - thin presentation layer over the relay API.

Responsibilities:
    - Chat bubble display with streaming Markdown rendering
    - Typing indicator and single-flight send control
    - In-memory transcript for one page visit

All exchange logic lives in session.py and is independent of NiceGUI.
"""

"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Frame decoding across read boundaries
    - models/: Request, turn and stream event validation
    - relay/: Upstream frame interpretation and failure paths
    - ui/: Markdown rendering and the client exchange runner
    - audit, config: Best-effort logs and settings

Follows single responsibility per test function. Leverages pytest-check
for multiple assertions per test.
"""

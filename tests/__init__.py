"""Test package for Clinic Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP-level tests of the relay endpoints
    - helpers.py: Builders for simulated provider streams

The upstream provider is always simulated with httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""

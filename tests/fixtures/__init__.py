"""
Test Fixtures and Utilities

- fake_api: in-memory finance API served through httpx.MockTransport
"""

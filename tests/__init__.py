"""
Test Suite for moneyboard

Test Structure:
- fixtures/: In-memory fake API and shared helpers
- unit/: Unit tests mirroring src/ package structure
- integration/: Gateway, store, config and CLI tests against the fake API

All test data is synthetic; no test talks to a real server.
"""

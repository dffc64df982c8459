"""
Test fixtures for Assert Retry.

Deterministic stand-ins for the engine's collaborators live in
tests/unit/conftest.py as factory fixtures:
- fake_clock: controllable monotonic clock
- create_recording_wait: wait strategy counting calls and advancing the clock
- create_producer: producer replaying a scripted sequence of values/errors
"""

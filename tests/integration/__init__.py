"""
Integration tests for Assert Retry.

Test the retry engine end to end with the real monotonic clock:
- Background writers becoming visible after a delay
- Event-driven waiting
- Timeouts measured in real time
"""

"""
Unit tests for Assert Retry.

Test individual components in isolation, with a fake clock:
- Timeout (strict expiry, restart, lifecycle errors)
- Wait strategies (sleep, backoff, event, overflow clamping)
- Retry policy, attempt records, failure messages
- Config builder (eager validation, mandatory fields)
- Retry engine (termination rules, attempt history)
"""

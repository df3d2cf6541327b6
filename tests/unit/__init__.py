"""
Unit tests for the ScopeDB client.

Test individual components in isolation:
- Data models and enum wire names
- Retry policy decisions and jitter
- Retrying executor (fake clock, scripted transport)
- Response resolver (error taxonomy)
- Client orchestration (submit / fetch / ingest)
- httpx transport (MockTransport)
"""

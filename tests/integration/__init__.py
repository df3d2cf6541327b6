"""
Integration tests for the ScopeDB client.

Run against a real ScopeDB server (marked with @pytest.mark.integration):
- Statement submit, fetch and polling
- Batch ingestion
- Error responses for unknown statements
"""

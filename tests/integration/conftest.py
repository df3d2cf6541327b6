"""Integration test fixtures (service checks and prerequisites).

Integration tests are skipped if the ScopeDB server is not running.
Start a ScopeDB server listening on localhost:6543 to run them.
"""

import httpx
import pytest
import pytest_asyncio

from scopedb_client.client.orchestrator import ScopeDBClient
from scopedb_client.config import Settings

SCOPEDB_URL = "http://localhost:6543"


@pytest.fixture(scope="session")
def check_scopedb():
    """Check if ScopeDB is reachable at localhost:6543.

    Any HTTP answer counts as reachable; skips tests otherwise.
    """
    try:
        httpx.get(f"{SCOPEDB_URL}/v1/statements/health-probe", timeout=5)
    except httpx.HTTPError as e:
        pytest.skip(f"ScopeDB not available: {e}")


@pytest.fixture
def integration_settings() -> Settings:
    return Settings(
        _env_file=None,
        ENDPOINT=SCOPEDB_URL,
        HTTP_TIMEOUT=30.0,
        RETRY_BASE_DELAY=0.5,
        RETRY_MAX_ELAPSED=60.0,
    )


@pytest_asyncio.fixture
async def scopedb_client(check_scopedb, integration_settings):
    """Create a client with its own httpx transport."""
    async with ScopeDBClient.from_settings(integration_settings) as client:
        yield client

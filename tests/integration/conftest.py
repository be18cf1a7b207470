"""Integration test fixtures (service checks and prerequisites).

Integration tests call the live ZipTax API and are skipped unless
ZIPTAX_API_KEY is set.
"""

import os

import pytest
import pytest_asyncio

from ziptax.client import ZiptaxClient


@pytest.fixture(scope="session")
def live_api_key() -> str:
    """Live API key from the environment; skips tests if missing."""
    api_key = os.environ.get("ZIPTAX_API_KEY")
    if not api_key:
        pytest.skip("ZIPTAX_API_KEY not set")
    return api_key


@pytest_asyncio.fixture
async def live_client(live_api_key):
    """Real ZiptaxClient against the public API."""
    client = ZiptaxClient(api_key=live_api_key)
    yield client
    await client.close()

"""API test fixtures."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.fixture
async def api_client():
    """HTTP client bound to the FastAPI app, no network involved."""
    from blob_commit.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

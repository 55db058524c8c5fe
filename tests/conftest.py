import httpx
import pytest
from httpx import ASGITransport

from factories import WEBHOOK_SECRET


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("ELEVENLABS_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.setenv("ELEVENLABS_API_KEY", "test-el-key")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c

import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch, tmp_path):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PAGE_PARAM", "page")
    monkeypatch.setenv("FAIL_FAST_PAGINATION", "true")
    return tmp_path / "data"


@pytest.fixture
async def client(mock_env):
    from venue_scraper.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c

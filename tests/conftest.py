# tests/conftest.py

import pytest
import pytest_asyncio
from freezegun import freeze_time
from httpx import ASGITransport, AsyncClient

from summarize_api.dependencies import get_limiter, get_summarizer
from summarize_api.exceptions import ProviderError
from summarize_api.limiter import RateLimiter
from summarize_api.main import app


class FakeSummarizer:
    """Records requests and answers without calling the provider."""

    def __init__(self, summary: str = "- point one\n- point two", error: Exception = None):
        self.summary = summary
        self.error = error
        self.requests = []

    async def summarize(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.summary


@pytest.fixture
def frozen_time():
    """Freeze wall-clock time; the event loop keeps its real clock."""
    with freeze_time("2026-10-19 12:00:00", real_asyncio=True) as frozen:
        yield frozen


@pytest.fixture
def limiter(frozen_time):
    limiter = RateLimiter(max_requests=5, window_seconds=60)
    yield limiter
    limiter.reset()


@pytest.fixture
def summarizer():
    return FakeSummarizer()


@pytest_asyncio.fixture(scope="function")
async def client(limiter, summarizer):
    """Provide an AsyncClient with the limiter and summarizer overridden."""
    app.dependency_overrides[get_limiter] = lambda: limiter
    app.dependency_overrides[get_summarizer] = lambda: summarizer
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def valid_body():
    return {
        "url": "https://example.com/post",
        "title": "Example post",
        "content": "Lorem ipsum dolor sit amet. " * 20,
    }


@pytest.fixture
def provider_down():
    return FakeSummarizer(
        error=ProviderError("Rate limit reached for gpt-3.5-turbo", 429),
    )


@pytest.fixture
def failing_summarizer():
    """Build a summarizer that raises `error` on every call."""
    def build(error: Exception) -> FakeSummarizer:
        return FakeSummarizer(error=error)
    return build

from datetime import timedelta

import pytest
from httpx import AsyncClient
from loguru import logger

from summarize_api.dependencies import get_limiter, get_summarizer
from summarize_api.exceptions import ProviderError
from summarize_api.main import app


# ── Success ──────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_summarize_ok(client: AsyncClient, summarizer, valid_body):
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 200
    assert r.json() == {"summary": "- point one\n- point two"}
    sent = summarizer.requests[0]
    assert sent.title == "Example post"
    assert sent.url == "https://example.com/post"
    assert sent.custom_prompt is None


@pytest.mark.asyncio
async def test_custom_prompt_passed_through(client: AsyncClient, summarizer, valid_body):
    valid_body["customPrompt"] = "What is the author's main claim?"
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 200
    assert summarizer.requests[0].custom_prompt == "What is the author's main claim?"


@pytest.mark.asyncio
async def test_blank_custom_prompt_ignored(client: AsyncClient, summarizer, valid_body):
    valid_body["customPrompt"] = "   "
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 200
    assert summarizer.requests[0].custom_prompt is None


# ── Methods / CORS ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_options_returns_200(client: AsyncClient):
    r = await client.options("/api/summarize")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_options_ignores_body(client: AsyncClient):
    r = await client.request("OPTIONS", "/api/summarize", content=b"garbage{")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_options_is_not_rate_limited(client: AsyncClient, limiter):
    for _ in range(5):
        limiter.allow("127.0.0.1")
    r = await client.options("/api/summarize")
    assert r.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
async def test_other_methods_not_allowed(client: AsyncClient, method):
    r = await client.request(method, "/api/summarize")
    assert r.status_code == 405
    assert r.json() == {"error": "Method not allowed"}


@pytest.mark.asyncio
async def test_cors_headers_present(client: AsyncClient, valid_body):
    for r in (
        await client.options("/api/summarize"),
        await client.post("/api/summarize", json=valid_body),
        await client.post("/api/summarize", json={}),
    ):
        assert r.headers["access-control-allow-origin"] == "*"
        assert r.headers["access-control-allow-methods"] == "POST, OPTIONS"
        assert r.headers["access-control-allow-headers"] == "Content-Type"


# ── Rate limiting ────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_sixth_request_is_rate_limited(client: AsyncClient, valid_body):
    for _ in range(5):
        r = await client.post("/api/summarize", json=valid_body)
        assert r.status_code == 200
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 429
    assert r.json() == {"error": "Too many requests. Please try again later."}
    assert int(r.headers["retry-after"]) >= 1


@pytest.mark.asyncio
async def test_rate_limit_resets_after_window(client: AsyncClient, frozen_time, valid_body):
    for _ in range(5):
        await client.post("/api/summarize", json=valid_body)
    assert (await client.post("/api/summarize", json=valid_body)).status_code == 429
    frozen_time.tick(timedelta(seconds=61))
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_invalid_requests_count_against_limit(client: AsyncClient, valid_body):
    for _ in range(5):
        await client.post("/api/summarize", json={"content": "short"})
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 429


@pytest.mark.asyncio
async def test_forwarded_for_identifies_client(client: AsyncClient, valid_body):
    first = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
    second = {"X-Forwarded-For": "198.51.100.2"}
    for _ in range(5):
        await client.post("/api/summarize", json=valid_body, headers=first)
    r = await client.post("/api/summarize", json=valid_body, headers=first)
    assert r.status_code == 429
    r = await client.post("/api/summarize", json=valid_body, headers=second)
    assert r.status_code == 200


# ── Failures ─────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_provider_status_is_mirrored(client: AsyncClient, provider_down, valid_body):
    app.dependency_overrides[get_summarizer] = lambda: provider_down
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 429
    assert "Rate limit reached for gpt-3.5-turbo" in r.json()["error"]
    assert r.json()["error"].startswith("OpenAI API error:")


@pytest.mark.asyncio
async def test_provider_auth_failure(client: AsyncClient, failing_summarizer, valid_body):
    failing = failing_summarizer(ProviderError("Incorrect API key provided", 401))
    app.dependency_overrides[get_summarizer] = lambda: failing
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 401
    assert "Incorrect API key provided" in r.json()["error"]


@pytest.mark.asyncio
async def test_unexpected_failure_is_500(client: AsyncClient, failing_summarizer, valid_body):
    failing = failing_summarizer(RuntimeError("boom"))
    app.dependency_overrides[get_summarizer] = lambda: failing
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error: boom"}


class ExplodingLimiter:
    def allow(self, identifier):
        raise RuntimeError("ledger exploded")


@pytest.mark.asyncio
async def test_failure_outside_summarizer_is_500(client: AsyncClient, valid_body):
    app.dependency_overrides[get_limiter] = lambda: ExplodingLimiter()
    r = await client.post("/api/summarize", json=valid_body)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error: ledger exploded"}
    assert r.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_rate_limit_is_logged(client: AsyncClient, valid_body):
    messages = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        for _ in range(6):
            await client.post(
                "/api/summarize",
                json=valid_body,
                headers={"X-Forwarded-For": "192.0.2.44"},
            )
    finally:
        logger.remove(sink_id)
    assert any("Rate limit exceeded for 192.0.2.44" in m for m in messages)

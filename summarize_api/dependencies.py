# GPL-3.0-only
from fastapi import Request

from summarize_api.limiter import RateLimiter
from summarize_api.services.summarizer import Summarizer


def get_limiter(request: Request) -> RateLimiter:
    return request.app.state.limiter


def get_summarizer(request: Request) -> Summarizer:
    return request.app.state.summarizer

# GPL-3.0-only
# summarize_api/main.py

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request

from summarize_api.cors import apply_cors_headers
from summarize_api.exceptions import (
    ProviderError,
    RateLimitExceeded,
    RequestValidationFailed,
    SummarizeExceptionHandler,
)
from summarize_api.limiter import RateLimiter
from summarize_api.routers import health, summarize
from summarize_api.services.summarizer import Summarizer
from summarize_api.settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    limiter = RateLimiter(
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
        sweep_interval_seconds=settings.rate_limit_sweep_seconds,
        enabled=settings.rate_limit_enabled,
    )
    summarizer = Summarizer(settings)
    app.state.limiter = limiter
    app.state.summarizer = summarizer
    limiter.start()
    yield
    # Shutdown
    await limiter.stop()
    await summarizer.close()


app = FastAPI(
    title="Page Summarizer API",
    version=get_settings().version,
    lifespan=lifespan,
)

# Register exception handlers
app.add_exception_handler(RequestValidationFailed, SummarizeExceptionHandler.validation_error_handler)   # type: ignore
app.add_exception_handler(RateLimitExceeded, SummarizeExceptionHandler.rate_limit_handler)              # type: ignore
app.add_exception_handler(ProviderError, SummarizeExceptionHandler.provider_error_handler)              # type: ignore
app.add_exception_handler(Exception, SummarizeExceptionHandler.unexpected_error_handler)                 # type: ignore


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    response = await call_next(request)
    return apply_cors_headers(response)


# Routers
app.include_router(summarize.router, prefix="/api/summarize", tags=["summarize"])
app.include_router(health.router, tags=["health"])


@app.get("/")
async def hello():
    return {"msg": "Send page text to POST /api/summarize"}

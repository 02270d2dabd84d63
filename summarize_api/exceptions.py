# GPL-3.0-only
# summarize_api/exceptions.py - error types and their HTTP rendering

from typing import Optional
from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from summarize_api.cors import apply_cors_headers
from summarize_api.utils.client_ip import get_client_ip


class SummarizeError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RequestValidationFailed(SummarizeError):
    status_code = 400


class RateLimitExceeded(SummarizeError):
    status_code = 429

    def __init__(
        self,
        message: str = "Too many requests. Please try again later.",
        retry_after: float = 0.0,
    ):
        super().__init__(message)
        self.retry_after = retry_after


class ProviderError(SummarizeError):
    """Failure reported by (or while reaching) the summarization provider."""
    status_code = 502


class SummarizeExceptionHandler:
    """Centralized request error handling."""
    @staticmethod
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationFailed,
    ) -> JSONResponse:
        logger.warning("Rejected request: {}", exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
        )

    @staticmethod
    async def rate_limit_handler(
        request: Request,
        exc: RateLimitExceeded,
    ) -> JSONResponse:
        logger.warning("Rate limit exceeded for {}", get_client_ip(request))
        headers = {}
        if exc.retry_after:
            headers["Retry-After"] = str(max(int(exc.retry_after + 0.999), 1))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=headers,
        )

    @staticmethod
    async def provider_error_handler(
        request: Request,
        exc: ProviderError,
    ) -> JSONResponse:
        """Mirror the provider's status and surface its message."""
        logger.error("Provider failure ({}): {}", exc.status_code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": f"OpenAI API error: {exc.message or 'Unknown error'}"},
        )

    @staticmethod
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last resort for anything the handlers above do not cover.

        Starlette runs this outside the app middleware, so the CORS headers
        are set here directly.
        """
        logger.opt(exception=exc).error("Unhandled error in {}", request.url.path)
        response = JSONResponse(
            status_code=500,
            content={"error": f"Internal server error: {exc}"},
        )
        return apply_cors_headers(response)

# GPL-3.0-only
# summarize_api/routers/summarize.py

from json import JSONDecodeError
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger

from summarize_api.dependencies import get_limiter, get_summarizer
from summarize_api.exceptions import RateLimitExceeded, RequestValidationFailed
from summarize_api.limiter import RateLimiter
from summarize_api.schemas import ErrorOut, SummarizeRequest, SummaryOut
from summarize_api.services.summarizer import Summarizer
from summarize_api.utils.client_ip import get_client_ip
from summarize_api.validation import validate_request


router = APIRouter()


async def _read_body(request: Request):
    try:
        return await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        return None


@router.post(
    "",
    response_model=SummaryOut,
    responses={
        400: {"model": ErrorOut},
        429: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
async def summarize(
    request: Request,
    limiter: RateLimiter = Depends(get_limiter),
    summarizer: Summarizer = Depends(get_summarizer),
):
    client_ip = get_client_ip(request)
    if not limiter.allow(client_ip):
        raise RateLimitExceeded(retry_after=limiter.retry_after(client_ip))

    body = await _read_body(request)
    error = validate_request(body)
    if error:
        raise RequestValidationFailed(error)

    payload = SummarizeRequest.model_validate(body)
    summary = await summarizer.summarize(payload)
    logger.info(
        "Summarized {} chars for {} ({} remaining)",
        len(payload.content),
        client_ip,
        limiter.remaining(client_ip),
    )
    return SummaryOut(summary=summary)


@router.options("")
async def preflight():
    return Response(status_code=status.HTTP_200_OK)


@router.api_route("", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def method_not_allowed():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
    )

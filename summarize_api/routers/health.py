# GPL-3.0-only
from fastapi import APIRouter, Depends

from summarize_api.dependencies import get_limiter
from summarize_api.extraction import extraction_policy
from summarize_api.limiter import RateLimiter
from summarize_api.settings import get_settings


router = APIRouter()


@router.get("/health")
async def health():
    # probed by the extension to prefer a local backend
    return {"status": "ok"}


@router.get("/healthz")
async def healthz(limiter: RateLimiter = Depends(get_limiter)):
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.version,
        "checks": {
            "provider": {"configured": settings.provider_configured},
            "rate_limiter": {
                "enabled": limiter.enabled,
                "sweeping": limiter.running,
                "tracked_clients": len(limiter),
            },
        },
    }


@router.get("/api/extraction-policy")
async def get_extraction_policy():
    return extraction_policy()

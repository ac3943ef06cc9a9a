from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from memora_backend.core.config import Settings
from memora_backend.core.dependencies import get_settings
from memora_backend.schemas.common import ServiceInfo

router = APIRouter()

ENDPOINTS = {
    "POST /api/create-payment-intent": "Create Stripe payment intent",
    "POST /api/confirm-payment": "Confirm payment with Stripe",
    "POST /api/improve-text": "Suggest improved versions of a journal entry",
    "POST /api/generate-caption": "Generate a caption for a photo entry",
    "GET /api/health": "Health check",
}


@router.get("/", response_model=ServiceInfo, tags=["Meta"])
async def read_root(settings: Settings = Depends(get_settings)):
    return ServiceInfo(message=settings.app_name, version=settings.app_version, endpoints=ENDPOINTS)


@router.get("/api/health", tags=["Health Check"])
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "stripe": "connected",
    }

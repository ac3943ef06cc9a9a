import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from memora_backend.api.endpoints import ai as ai_api
from memora_backend.api.endpoints import meta as meta_api
from memora_backend.api.endpoints import payments as payments_api
from memora_backend.core.config import Settings
from memora_backend.core.errors import register_exception_handlers
from memora_backend.core.logging_config import configure_logging
from memora_backend.core.middleware import (
    BodySizeLimitMiddleware,
    OriginAllowListMiddleware,
    RequestLoggingMiddleware,
)
from memora_backend.services.payment_provider import PaymentProvider, StripePaymentProvider
from memora_backend.services.writing_assistant import WritingAssistant

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    payment_provider: Optional[PaymentProvider] = None,
    writing_assistant: Optional[WritingAssistant] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.payment_provider = payment_provider or StripePaymentProvider(settings.stripe_secret_key)
    app.state.writing_assistant = writing_assistant or WritingAssistant(api_key=settings.openai_api_key)

    # Added innermost first. Outermost to innermost: logging, origin guard, CORS, body cap.
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.allowed_origins)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(meta_api.router)
    app.include_router(payments_api.router, prefix="/api", tags=["Payments"])
    app.include_router(ai_api.router, prefix="/api", tags=["AI"])

    return app


def get_application() -> FastAPI:
    """
    Build the app from the process environment. Used as a uvicorn factory:
    uvicorn --factory memora_backend.main:get_application
    """
    settings = Settings.from_env()
    configure_logging(settings.environment)
    logger.info(
        f"Memora backend configured: environment={settings.environment} port={settings.port} "
        f"stripe={'ready' if settings.stripe_configured else 'missing key'} "
        f"openai={'ready' if settings.openai_configured else 'missing key'}"
    )
    return create_app(settings)


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.environment)
    logger.info(f"Memora Backend Server starting on port {settings.port}")
    logger.info(f"Health check: http://localhost:{settings.port}/api/health")
    uvicorn.run(
        "memora_backend.main:get_application",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    run()

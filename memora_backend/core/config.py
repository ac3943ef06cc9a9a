import os
import logging
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = ["http://localhost:3000", "http://localhost:8080"]
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024  # 10MB


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseModel):
    """
    Process-wide configuration, built once at startup and handed to create_app().
    Business logic reads from this object, never from os.environ.
    """
    model_config = ConfigDict(frozen=True)

    app_name: str = "Memora Backend Server"
    app_version: str = "1.0.0"

    # Stripe API Keys
    stripe_secret_key: str = ""
    stripe_publishable_key: str = ""
    stripe_webhook_secret: str = "" # Loaded for completeness; no webhook route consumes it yet

    # OpenAI
    openai_api_key: str = ""

    port: int = 3000
    environment: str = "development"
    allowed_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key) and "YOUR_STRIPE_SECRET_KEY" not in self.stripe_secret_key

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        raw_origins = os.getenv("ALLOWED_ORIGINS")
        allowed_origins = _split_origins(raw_origins) if raw_origins else list(DEFAULT_ALLOWED_ORIGINS)

        settings = cls(
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY", ""),
            stripe_publishable_key=os.getenv("STRIPE_PUBLISHABLE_KEY", ""),
            stripe_webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            port=int(os.getenv("PORT", 3000)),
            environment=os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development",
            allowed_origins=allowed_origins,
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)),
        )

        if not settings.stripe_configured:
            # Avoid logging the key itself.
            logger.warning("Stripe secret key is not configured or is using a placeholder value.")
        return settings

import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class Config(BaseModel):
    app_name: str = "Time-Off Ledger"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    # Admin gate. Identity itself is owned by the host application;
    # when set, admin endpoints require a matching X-Admin-Secret header.
    admin_secret: Optional[str] = Field(default=os.getenv("ADMIN_SECRET") or None)
    default_actor: str = os.getenv("DEFAULT_ACTOR", "ADMIN")
    request_id_header: str = "X-Request-ID"
    actor_header: str = "X-Actor"
    admin_secret_header: str = "X-Admin-Secret"

    # Read paths
    event_page_limit: int = int(os.getenv("EVENT_PAGE_LIMIT", "2000"))

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173,"
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

    # Scalability
    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "120"))

    @property
    def rate_limit_enabled(self) -> bool:
        return self.environment != "testing"

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment == "production" and not settings.admin_secret:
    raise RuntimeError(
        "FATAL: ADMIN_SECRET must be set in production. Set it as an environment variable."
    )
elif settings.environment == "development" and not settings.admin_secret:
    _logger.warning("⚠ ADMIN_SECRET not set, admin endpoints are open (development only).")

import json
import os
import hashlib
from pathlib import Path
from dotenv import load_dotenv

from app.exceptions import ConfigurationError
from app.services.auth_service import hash_password

BASE_DIR = Path(__file__).resolve().parent.parent  # -> project root

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")

REQUIRED_SETTINGS = ("MP_URL", "PARTNER", "CLIENT_ID", "CLIENT_SECRET")


def _load_credentials_blob(raw: str | None) -> dict:
    """Parse the `{"clientId": ..., "clientSecret": ...}` blob kept in the secret store."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("MP_API_CREDS is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ConfigurationError("MP_API_CREDS must be a JSON object")
    return data


class Settings:
    PROJECT_NAME = "Marketplace Discount Portal"

    def __init__(self):
        self.MP_URL = (os.getenv("MP_URL") or "").rstrip("/")
        self.PARTNER = os.getenv("PARTNER")
        self.MP_OAUTH_SCOPE = os.getenv("MP_OAUTH_SCOPE", "ROLE_PARTNER")

        # Credentials from the secret blob win over the individual variables.
        creds = _load_credentials_blob(os.getenv("MP_API_CREDS"))
        self.CLIENT_ID = creds.get("clientId") or os.getenv("CLIENT_ID")
        self.CLIENT_SECRET = creds.get("clientSecret") or os.getenv("CLIENT_SECRET")

        self.SHARED_PASSWORD = os.getenv("SHARED_PASSWORD", "defaultPassword")
        self.PASSWORD_HASH = hash_password(self.SHARED_PASSWORD)
        self.SESSION_SECRET = os.getenv("SESSION_SECRET") or hashlib.sha256(
            f"session:{self.PASSWORD_HASH}".encode("utf-8")
        ).hexdigest()
        self.SECURE_COOKIES = os.getenv("ENVIRONMENT", "development").lower() == "production"
        self.AUTH_COOKIE_MAX_AGE_SECONDS = int(os.getenv("AUTH_COOKIE_MAX_AGE_SECONDS", 24 * 60 * 60))
        self.REQUIRE_AUTH_FOR_API = os.getenv("REQUIRE_AUTH_FOR_API", "false").lower() == "true"

        self.HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", 20))
        self.CATALOG_BATCH_SIZE = int(os.getenv("CATALOG_BATCH_SIZE", 7))
        self.CATALOG_PAGE_SIZE = int(os.getenv("CATALOG_PAGE_SIZE", 500))

        self.FRONTEND_BUILD_DIR = os.getenv("FRONTEND_BUILD_DIR")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    def validate(self) -> "Settings":
        missing = [name for name in REQUIRED_SETTINGS if not getattr(self, name)]
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
        if self.CATALOG_BATCH_SIZE < 1 or self.CATALOG_PAGE_SIZE < 1:
            raise ConfigurationError("CATALOG_BATCH_SIZE and CATALOG_PAGE_SIZE must be positive")
        return self


settings = Settings()

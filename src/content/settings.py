"""Client runtime configuration.

Loads environment variables, sets defaults, and exposes constants used by
the content client, the contact form and the asset fetcher.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv("env/.env")

logger = logging.getLogger(__name__)

APP_ENV = os.getenv("APP_ENV", "development")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")
ASSET_BASE_URL = os.getenv("ASSET_BASE_URL", API_BASE_URL)

EMAILJS_SERVICE_ID = os.getenv("EMAILJS_SERVICE_ID", "")
EMAILJS_TEMPLATE_ID = os.getenv("EMAILJS_TEMPLATE_ID", "")
EMAILJS_PUBLIC_KEY = os.getenv("EMAILJS_PUBLIC_KEY", "")
EMAILJS_API_URL = os.getenv(
    "EMAILJS_API_URL", "https://api.emailjs.com/api/v1.0/email/send"
)

OWNER_NAME = os.getenv("OWNER_NAME", "Samarth")
OWNER_EMAIL = os.getenv("OWNER_EMAIL", "samarh260805@gmail.com")

REQUIRED_VARS = ("EMAILJS_SERVICE_ID", "EMAILJS_TEMPLATE_ID", "EMAILJS_PUBLIC_KEY")


def is_production() -> bool:
    return APP_ENV == "production"


def is_development() -> bool:
    return APP_ENV == "development"


def validate_environment() -> list[str]:
    """Return the names of missing required variables.

    Raises:
        RuntimeError: In production, if any required variable is missing.
    """
    missing = [name for name in REQUIRED_VARS if not os.getenv(name)]
    if missing:
        logger.error("Missing required environment variables: %s", missing)
        if is_production():
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
    return missing

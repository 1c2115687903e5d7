"""
Application settings.

All configuration comes from environment variables so the same code runs in
development, tests and production.
"""

import logging
import os

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cms.db")
SITE_URL = os.getenv("SITE_URL", "http://localhost:8000").rstrip("/")
API_PREFIX = "/" + os.getenv("API_PREFIX", "/api").strip("/")


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("cms_api")


def rest_url(path: str = "") -> str:
    """Absolute URL for a path inside the REST API."""
    return f"{SITE_URL}{API_PREFIX}/{path.lstrip('/')}"

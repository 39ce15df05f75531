import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = LOG_LEVEL == "DEBUG"

SERVICE_NAME = "Guesty MCP Server"

GUESTY_CLIENT_ID = os.getenv("GUESTY_CLIENT_ID")
GUESTY_CLIENT_SECRET = os.getenv("GUESTY_CLIENT_SECRET")

GUESTY_BASE_URL = os.getenv("GUESTY_BASE_URL", "https://open-api.guesty.com/v1").rstrip("/")
GUESTY_TOKEN_URL = os.getenv("GUESTY_TOKEN_URL", "https://open-api.guesty.com/oauth2/token")
GUESTY_SCOPE = os.getenv("GUESTY_SCOPE", "open-api")

# Unset means the HTTP client default (no timeout)
_timeout_raw = os.getenv("GUESTY_REQUEST_TIMEOUT")
GUESTY_REQUEST_TIMEOUT: Optional[float] = float(_timeout_raw) if _timeout_raw else None

REPORT_MODE = os.getenv("REPORT_MODE", "extended").lower()
if REPORT_MODE not in ("extended", "basic"):
    raise ValueError("REPORT_MODE must be 'extended' or 'basic'")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
]

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

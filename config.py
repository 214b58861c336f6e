"""
Configuration constants for the Apps Script tools.
Centralizes API endpoints, OAuth settings, defaults and log categories.
"""
from typing import Final

# Apps Script REST API
API_BASE_URL: Final[str] = "https://script.googleapis.com"
API_VERSION: Final[str] = "v1"

# OAuth
TOKEN_URI: Final[str] = "https://oauth2.googleapis.com/token"

# Request defaults
DEFAULT_DEV_MODE: Final[bool] = True
DEFAULT_PAGE_SIZE: Final[int] = 100
DEFAULT_ALT: Final[str] = "json"
DEFAULT_PRETTY_PRINT: Final[bool] = True

# HTTP timeouts (seconds). No read timeout: scripts.run may take up to 6 minutes
CONNECT_TIMEOUT: Final[float] = 5.0
READ_TIMEOUT: Final[float | None] = None
WRITE_TIMEOUT: Final[float] = 30.0

# Log categories per tool
LOG_SCRIPT_RUN: Final[str] = "SCRIPT_RUN"
LOG_VERSIONS_LIST: Final[str] = "SCRIPT_VERSIONS_LIST"
LOG_PROJECT_GET: Final[str] = "SCRIPT_PROJECT_GET"
LOG_OAUTH: Final[str] = "OAUTH"
LOG_API: Final[str] = "API"

# Log levels in ascending severity
LOG_LEVELS: Final[dict[str, int]] = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}

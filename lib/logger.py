"""
Structured stderr logger used by every tool.

Each record is one line:
    2025-01-01T00:00:00.000Z [INFO] [SCRIPT_RUN] Executing function: f {"scriptId": "..."}

Logging is observability only and never raises into the caller.
"""
import json
import sys
from typing import Any

from config import LOG_API, LOG_LEVELS
from env_loader import get_log_level
from lib.common import mask_token, now_iso

SENSITIVE_HEADERS = {"authorization", "x-goog-api-key", "cookie"}


def log(*a: Any) -> None:
    print(*a, file=sys.stderr, flush=True)


class Logger:
    """Leveled logger with API call/response helpers."""

    def __init__(self, level: str | None = None) -> None:
        self._level = level

    @property
    def level(self) -> str:
        # LOG_LEVEL is read on every call
        level = self._level or get_log_level()
        return level if level in LOG_LEVELS else "INFO"

    def is_enabled(self, level: str) -> bool:
        return LOG_LEVELS[level] >= LOG_LEVELS[self.level]

    def _emit(self, level: str, category: str, message: str, data: Any = None) -> None:
        if not self.is_enabled(level):
            return
        line = f"{now_iso()} [{level}] [{category}] {message}"
        if data is not None:
            try:
                line += " " + json.dumps(data, ensure_ascii=False, default=str)
            except (TypeError, ValueError):
                line += f" {data!r}"
        log(line)

    def debug(self, category: str, message: str, data: Any = None) -> None:
        self._emit("DEBUG", category, message, data)

    def info(self, category: str, message: str, data: Any = None) -> None:
        self._emit("INFO", category, message, data)

    def warn(self, category: str, message: str, data: Any = None) -> None:
        self._emit("WARN", category, message, data)

    def error(self, category: str, message: str, data: Any = None) -> None:
        self._emit("ERROR", category, message, data)

    def log_api_call(self, method: str, url: str, headers: dict[str, str] | None = None) -> None:
        """Log an outgoing request with secrets masked."""
        safe = {
            k: mask_token(v) if k.lower() in SENSITIVE_HEADERS else v
            for k, v in (headers or {}).items()
        }
        self.info(LOG_API, f"{method.upper()} {url}", {"headers": safe})

    def log_api_response(
        self,
        method: str,
        url: str,
        status: int,
        duration_ms: int,
        size: str | int = "unknown",
    ) -> None:
        """Log a response summary. Non-2xx statuses are logged at WARN."""
        data = {"status": status, "duration": f"{duration_ms}ms", "size": size}
        msg = f"{method.upper()} {url} -> {status}"
        if 200 <= status < 300:
            self.info(LOG_API, msg, data)
        else:
            self.warn(LOG_API, msg, data)


# Shared instance for the application
logger = Logger()

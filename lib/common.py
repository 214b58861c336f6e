"""
Common utility functions shared by the tools and the logger.
"""
import time
from datetime import datetime, timezone
from typing import Any


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_ms() -> int:
    """Monotonic clock in milliseconds, for durations."""
    return int(time.monotonic() * 1000)


def elapsed_ms(start_ms: int) -> int:
    """Milliseconds elapsed since start_ms (from now_ms)."""
    return now_ms() - start_ms


def mask_token(value: Any, keep: int = 12) -> str:
    """
    Mask a secret for logging.

    Keeps the "Bearer " scheme and the first `keep` characters of the token.
    """
    if value is None:
        return ""
    s = str(value)
    prefix = ""
    if s.startswith("Bearer "):
        prefix, s = "Bearer ", s[len("Bearer "):]
    if len(s) <= keep:
        return prefix + "*" * len(s)
    return f"{prefix}{s[:keep]}..."


def bool_str(value: bool) -> str:
    """Render a bool the way the API expects it in a query string."""
    return "true" if value else "false"

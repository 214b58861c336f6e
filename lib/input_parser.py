"""
Input parsing and validation utilities.

Functions for parsing and normalizing tool inputs supplied by a calling
agent, handling various input formats (strings, dicts, lists).
"""
import json
from typing import Any


def strip_quotes(s: str) -> str:
    """
    Strip outer quotes from a string.

    Args:
        s: Input string

    Returns:
        String with leading/trailing quotes removed
    """
    s = s.strip()
    if len(s) >= 2 and ((s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'"))):
        return s[1:-1]
    return s


def coerce_str(x: Any, keys: tuple[str, ...] = ()) -> str | None:
    """
    Extract a string from various input formats.

    Handles:
    - Direct string input
    - Dict with specified keys

    Args:
        x: Input value (string, dict, or other)
        keys: Tuple of keys to try in dict order

    Returns:
        Extracted string or None if not found
    """
    if isinstance(x, str):
        return strip_quotes(x)
    if isinstance(x, dict):
        for k in keys:
            v = x.get(k)
            if isinstance(v, str):
                return strip_quotes(v)
    return None


def coerce_int(x: Any, keys: tuple[str, ...] = ()) -> int | None:
    """
    Extract an integer from various input formats.

    Args:
        x: Input value
        keys: Tuple of keys to try in dict order

    Returns:
        Extracted integer or None if not found/invalid
    """
    if isinstance(x, bool):
        return None
    if isinstance(x, int):
        return x
    if isinstance(x, float) and x.is_integer():
        return int(x)
    if isinstance(x, str):
        try:
            return int(strip_quotes(x))
        except ValueError:
            return None
    if isinstance(x, dict):
        for k in keys:
            v = x.get(k)
            result = coerce_int(v, ())
            if result is not None:
                return result
    return None


def coerce_bool(x: Any, keys: tuple[str, ...] = ()) -> bool | None:
    """
    Extract a boolean from various input formats.

    Args:
        x: Input value
        keys: Tuple of keys to try in dict order

    Returns:
        Extracted boolean or None if not found/invalid
    """
    if isinstance(x, bool):
        return x
    if isinstance(x, str):
        lower = strip_quotes(x).lower()
        if lower in ("true", "1", "yes"):
            return True
        if lower in ("false", "0", "no"):
            return False
        return None
    if isinstance(x, dict):
        for k in keys:
            v = x.get(k)
            result = coerce_bool(v, ())
            if result is not None:
                return result
    return None


def as_list(x: Any) -> list[Any]:
    """
    Convert a `parameters` input to a list.

    Handles:
    - None -> empty list
    - List/tuple -> list (items untouched)
    - String holding a JSON array -> decoded list
    - Any other single value -> list with one element
    """
    if x is None:
        return []
    if isinstance(x, (list, tuple)):
        return list(x)
    if isinstance(x, str):
        s = x.strip()
        if s.startswith("[") and s.endswith("]"):
            try:
                decoded = json.loads(s)
            except json.JSONDecodeError:
                return [x]
            if isinstance(decoded, list):
                return decoded
    return [x]

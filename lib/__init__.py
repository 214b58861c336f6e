"""
Utility libraries for the Apps Script tools.
"""
from .common import now_iso, now_ms, elapsed_ms, mask_token, bool_str
from .types import (
    ApiResult,
    ToolResult,
    ErrorEnvelope,
    RawError,
    ToolDefinition,
    FunctionSchema,
)

__all__ = [
    # Result types
    "ApiResult",
    "ToolResult",
    "ErrorEnvelope",
    "RawError",
    "ToolDefinition",
    "FunctionSchema",
    # Functions
    "now_iso",
    "now_ms",
    "elapsed_ms",
    "mask_token",
    "bool_str",
]

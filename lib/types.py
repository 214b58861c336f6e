"""
Type definitions for the Apps Script tools.
Provides type safety for result envelopes and tool schemas.
"""
from typing import TypedDict, Any


class RawError(TypedDict):
    """Exception name and formatted traceback."""
    name: str
    stack: str


class ErrorEnvelope(TypedDict):
    """Normalized failure result returned by every tool."""
    error: bool
    message: str
    details: dict[str, Any]
    rawError: RawError


# Successful results are the remote JSON body, passed through unmodified
ApiResult = dict[str, Any]
ToolResult = ApiResult | ErrorEnvelope


class FunctionSchema(TypedDict):
    """Function block of a tool definition."""
    name: str
    description: str
    parameters: dict[str, Any]


class ToolDefinition(TypedDict):
    """Declarative schema exposed for discovery by a calling agent."""
    type: str
    function: FunctionSchema

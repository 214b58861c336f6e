"""
Base tool class for Apps Script API wrappers.

Provides common functionality for all tools:
- Declarative schema (definition) for discovery
- Required-field validation before any request is built
- URL/query construction against the fixed API base
- A single logged HTTP request per invocation
- Error normalization (errors are returned, never raised)
"""
from abc import ABC, abstractmethod
from typing import Any, ClassVar
from urllib.parse import quote

import httpx

from config import (
    API_BASE_URL,
    API_VERSION,
    CONNECT_TIMEOUT,
    READ_TIMEOUT,
    WRITE_TIMEOUT,
)
from lib.common import elapsed_ms, now_iso, now_ms
from lib.errors import (
    ApiError,
    AuthError,
    ValidationError,
    decode_error_body,
    error_details,
    error_envelope,
    remote_error_message,
)
from lib.input_parser import coerce_bool, coerce_int, coerce_str
from lib.logger import logger
from lib.types import ToolDefinition, ToolResult
from oauth_helper import OAuthHelper, get_oauth_helper

Query = list[tuple[str, str]]


def http_client() -> httpx.AsyncClient:
    """Create an AsyncClient with redirects, a connect timeout and no read timeout (no retries)."""
    timeout = httpx.Timeout(connect=CONNECT_TIMEOUT, read=READ_TIMEOUT, write=WRITE_TIMEOUT, pool=None)
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


class BaseTool(ABC):
    """
    Abstract base class for all Apps Script API tools.

    Subclasses must define:
    - NAME: tool name exposed to the calling agent
    - DESCRIPTION: one-line description
    - CATEGORY: log category
    - PARAMETERS: JSON-schema properties keyed by argument name
    - REQUIRED: names of required arguments

    and implement parse_args() and execute().

    Example:
        class ProjectGetTool(BaseTool):
            NAME = "script_projects_get"
            REQUIRED = ("scriptId",)
            ...

        result = await ProjectGetTool(oauth)(scriptId="abc")
    """

    NAME: ClassVar[str] = ""
    DESCRIPTION: ClassVar[str] = ""
    CATEGORY: ClassVar[str] = "TOOL"
    PARAMETERS: ClassVar[dict[str, dict[str, Any]]] = {}
    REQUIRED: ClassVar[tuple[str, ...]] = ()

    # Include elapsed time in error details
    TIMED: ClassVar[bool] = False
    FAILURE_MESSAGE: ClassVar[str] = "Tool invocation failed"

    def __init__(self, oauth: OAuthHelper | None = None, base_url: str = API_BASE_URL) -> None:
        """
        Initialize tool with an OAuth helper and optional base URL override.

        Args:
            oauth: OAuthHelper instance; the global helper is used when omitted
            base_url: API base (scheme + host)
        """
        self._oauth = oauth
        self.base_url = base_url.rstrip("/")

    @property
    def oauth(self) -> OAuthHelper:
        """OAuth helper, resolved lazily so configuration errors surface as envelopes."""
        if self._oauth is None:
            try:
                self._oauth = get_oauth_helper()
            except (RuntimeError, ValueError) as e:
                raise AuthError(str(e)) from e
        return self._oauth

    # === Discovery ===

    @classmethod
    def definition(cls) -> ToolDefinition:
        """Declarative schema for the calling agent."""
        return {
            "type": "function",
            "function": {
                "name": cls.NAME,
                "description": cls.DESCRIPTION,
                "parameters": {
                    "type": "object",
                    "properties": {k: dict(v) for k, v in cls.PARAMETERS.items()},
                    "required": list(cls.REQUIRED),
                },
            },
        }

    # === Invocation ===

    async def __call__(self, **args: Any) -> ToolResult:
        """Run the tool. Always returns a value: the API body or an error envelope."""
        started = now_ms()
        params: dict[str, Any] = {}
        try:
            params = self.parse_args(args)
            return await self.execute(params, started)
        except Exception as e:
            script_id = params.get("scriptId") or self.raw_script_id(args)
            details = error_details(e, script_id, elapsed_ms(started) if self.TIMED else None)
            logger.error(self.CATEGORY, self.FAILURE_MESSAGE, details)
            return error_envelope(e, details)

    @abstractmethod
    def parse_args(self, args: dict[str, Any]) -> dict[str, Any]:
        """Validate and normalize raw arguments. Raises ValidationError."""

    @abstractmethod
    async def execute(self, params: dict[str, Any], started: int) -> ToolResult:
        """Perform the request with validated params and return the API body."""

    # === Argument Helpers ===

    @staticmethod
    def raw_script_id(args: dict[str, Any]) -> str | None:
        """Best-effort scriptId for error details when parsing failed."""
        for name in ("scriptId", "script_id"):
            value = coerce_str(args.get(name), ("scriptId", "script_id", "id"))
            if value and value.strip():
                return value.strip()
        return None

    @staticmethod
    def require_str(args: dict[str, Any], name: str, aliases: tuple[str, ...] = ()) -> str:
        """Get a required non-empty string argument."""
        value = coerce_str(args.get(name), (name, *aliases))
        if value is None:
            for alias in aliases:
                value = coerce_str(args.get(alias))
                if value is not None:
                    break
        if not value or not value.strip():
            raise ValidationError(f"{name} is required")
        return value.strip()

    @staticmethod
    def optional_str(args: dict[str, Any], name: str) -> str | None:
        value = coerce_str(args.get(name), (name,))
        return value if value else None

    @staticmethod
    def optional_bool(args: dict[str, Any], name: str, default: bool) -> bool:
        raw = args.get(name)
        if raw is None:
            return default
        value = coerce_bool(raw, (name,))
        if value is None:
            raise ValidationError(f"{name} must be a boolean")
        return value

    @staticmethod
    def optional_int(args: dict[str, Any], name: str, default: int) -> int:
        raw = args.get(name)
        if raw is None:
            return default
        value = coerce_int(raw, (name,))
        if value is None:
            raise ValidationError(f"{name} must be an integer")
        return value

    # === URL / HTTP ===

    def api_url(self, collection: str, resource: str, *suffix: str) -> str:
        """
        Build `{base}/v1/{collection}/{resource}[/suffix...]`.

        Pass IDs through quote_id() first so an ID can never add path
        segments; `:run`-style custom verbs are appended after quoting.
        """
        parts = [self.base_url, API_VERSION, collection, resource, *suffix]
        return "/".join(parts)

    @staticmethod
    def quote_id(script_id: str) -> str:
        return quote(script_id, safe="")

    async def send(
        self,
        method: str,
        url: str,
        query: Query,
        headers: dict[str, str],
        body: Any = None,
    ) -> httpx.Response:
        """Issue exactly one request and log its call/response metadata."""
        full_url = httpx.URL(url, params=query)
        logger.log_api_call(method, str(full_url), headers)

        fetch_started = now_ms()
        async with http_client() as client:
            if body is None:
                r = await client.request(method, full_url, headers=headers)
            else:
                r = await client.request(method, full_url, headers=headers, json=body)

        logger.log_api_response(
            method,
            str(full_url),
            r.status_code,
            elapsed_ms(fetch_started),
            r.headers.get("content-length", "unknown"),
        )
        return r

    def raise_detailed(self, r: httpx.Response, script_id: str, started: int) -> None:
        """
        Log a detailed record for a non-2xx response and raise ApiError.

        Message format: "API Error (<status>): <remote message>".
        """
        body = decode_error_body(r.text)
        detailed = {
            "status": r.status_code,
            "statusText": r.reason_phrase,
            "url": str(r.request.url),
            "errorResponse": body,
            "duration": elapsed_ms(started),
            "scriptId": script_id,
            "timestamp": now_iso(),
        }
        logger.error(self.CATEGORY, "API request failed", detailed)
        raise ApiError(
            f"API Error ({r.status_code}): {remote_error_message(body)}",
            status=r.status_code,
            reason=r.reason_phrase,
            body=body,
        )

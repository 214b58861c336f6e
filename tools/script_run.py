"""
Script-run tool: scripts.run on the Apps Script API.

POST {base}/v1/scripts/{scriptId}:run
body: {"function": <functionName>, "parameters": [...], "devMode": bool}
"""
import json
from typing import Any

from config import DEFAULT_ALT, DEFAULT_DEV_MODE, DEFAULT_PRETTY_PRINT, LOG_SCRIPT_RUN
from core.base_tool import BaseTool, Query
from lib.common import bool_str
from lib.errors import ApiError, decode_error_body
from lib.input_parser import as_list
from lib.logger import logger
from lib.types import ToolResult


class ScriptRunTool(BaseTool):
    """Run a function in an Apps Script project."""

    NAME = "script_run"
    DESCRIPTION = "Run a Google Apps Script."
    CATEGORY = LOG_SCRIPT_RUN
    FAILURE_MESSAGE = "Error running the script"
    REQUIRED = ("scriptId", "functionName")
    PARAMETERS = {
        "scriptId": {
            "type": "string",
            "description": "The ID of the script to run.",
        },
        "functionName": {
            "type": "string",
            "description": "The name of the function to execute in the Apps Script.",
        },
        "parameters": {
            "type": "array",
            "description": "Parameters to pass to the function.",
            "default": [],
        },
        "devMode": {
            "type": "boolean",
            "description": "Whether to run in development mode (uses latest saved version).",
            "default": True,
        },
        "fields": {
            "type": "string",
            "description": "Selector specifying which fields to include in a partial response.",
        },
        "alt": {
            "type": "string",
            "enum": ["json", "xml"],
            "description": "Data format for response.",
        },
        "key": {
            "type": "string",
            "description": "API key for the project.",
        },
        "access_token": {
            "type": "string",
            "description": "OAuth access token.",
        },
        "oauth_token": {
            "type": "string",
            "description": "OAuth 2.0 token for the current user.",
        },
        "quotaUser": {
            "type": "string",
            "description": "Available to use for quota purposes for server-side applications.",
        },
        "prettyPrint": {
            "type": "boolean",
            "description": "Returns response with indentations and line breaks.",
        },
    }

    def parse_args(self, args: dict[str, Any]) -> dict[str, Any]:
        # key / access_token / oauth_token are accepted but never forwarded:
        # authentication travels in the Authorization header.
        return {
            "scriptId": self.require_str(args, "scriptId", ("script_id",)),
            "functionName": self.require_str(args, "functionName", ("function", "function_name")),
            "parameters": as_list(args.get("parameters")),
            "devMode": self.optional_bool(args, "devMode", DEFAULT_DEV_MODE),
            "fields": self.optional_str(args, "fields"),
            "alt": self.optional_str(args, "alt") or DEFAULT_ALT,
            "quotaUser": self.optional_str(args, "quotaUser"),
            "prettyPrint": self.optional_bool(args, "prettyPrint", DEFAULT_PRETTY_PRINT),
        }

    @staticmethod
    def build_query(params: dict[str, Any]) -> Query:
        query: Query = []
        if params["fields"]:
            query.append(("fields", params["fields"]))
        if params["alt"]:
            query.append(("alt", params["alt"]))
        query.append(("prettyPrint", bool_str(params["prettyPrint"])))
        if params["quotaUser"]:
            query.append(("quotaUser", params["quotaUser"]))
        return query

    @staticmethod
    def build_body(params: dict[str, Any]) -> dict[str, Any]:
        return {
            "function": params["functionName"],
            "parameters": params["parameters"],
            "devMode": params["devMode"],
        }

    def build_url(self, script_id: str) -> str:
        return self.api_url("scripts", f"{self.quote_id(script_id)}:run")

    async def execute(self, params: dict[str, Any], started: int) -> ToolResult:
        script_id = params["scriptId"]
        url = self.build_url(script_id)
        body = self.build_body(params)

        headers = dict(await self.oauth.get_auth_headers())
        headers["Content-Type"] = "application/json"

        logger.info(self.CATEGORY, f"Executing function: {params['functionName']}", {
            "scriptId": script_id,
            "functionName": params["functionName"],
            "parameters": params["parameters"],
            "devMode": params["devMode"],
        })

        r = await self.send("POST", url, self.build_query(params), headers, body)

        if not r.is_success:
            error_data = decode_error_body(r.text)
            raise ApiError(
                json.dumps(error_data, ensure_ascii=False),
                status=r.status_code,
                reason=r.reason_phrase,
                body=error_data,
            )

        data = r.json()

        response = data.get("response") if isinstance(data, dict) else None
        response = response if isinstance(response, dict) else {}
        logger.info(self.CATEGORY, "Function execution completed", {
            "scriptId": script_id,
            "functionName": params["functionName"],
            "hasResult": bool(response.get("result")),
            "hasError": bool(data.get("error")) if isinstance(data, dict) else False,
            "done": data.get("done") if isinstance(data, dict) else None,
        })

        metadata = response.get("executionMetadata")
        if isinstance(metadata, dict) and metadata.get("log"):
            logger.info(self.CATEGORY, "Script execution logs:", {"logs": metadata["log"]})

        return data

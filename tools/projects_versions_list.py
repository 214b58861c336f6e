"""
Versions-list tool: projects.versions.list on the Apps Script API.

GET {base}/v1/projects/{scriptId}/versions?pageSize=...&pageToken=...
"""
from typing import Any

from config import DEFAULT_ALT, DEFAULT_PAGE_SIZE, DEFAULT_PRETTY_PRINT, LOG_VERSIONS_LIST
from core.base_tool import BaseTool, Query
from lib.common import bool_str, elapsed_ms
from lib.errors import ValidationError
from lib.logger import logger
from lib.types import ToolResult


class VersionsListTool(BaseTool):
    """List the versions of an Apps Script project."""

    NAME = "script_projects_versions_list"
    DESCRIPTION = "List the versions of a Google Apps Script project."
    CATEGORY = LOG_VERSIONS_LIST
    FAILURE_MESSAGE = "Error listing script versions"
    TIMED = True
    REQUIRED = ("scriptId",)
    PARAMETERS = {
        "scriptId": {
            "type": "string",
            "description": "The ID of the script project.",
        },
        "pageSize": {
            "type": "integer",
            "description": "The number of versions to return per page.",
        },
        "pageToken": {
            "type": "string",
            "description": "The token for the next page of results.",
        },
        "fields": {
            "type": "string",
            "description": "Selector specifying which fields to include in a partial response.",
        },
        "alt": {
            "type": "string",
            "enum": ["json"],
            "description": "Data format for response.",
        },
        "key": {
            "type": "string",
            "description": "API key for the request.",
        },
        "access_token": {
            "type": "string",
            "description": "OAuth access token.",
        },
        "oauth_token": {
            "type": "string",
            "description": "OAuth 2.0 token for the current user.",
        },
        "prettyPrint": {
            "type": "boolean",
            "description": "Returns response with indentations and line breaks.",
        },
    }

    def parse_args(self, args: dict[str, Any]) -> dict[str, Any]:
        page_size = self.optional_int(args, "pageSize", DEFAULT_PAGE_SIZE)
        if page_size < 1:
            raise ValidationError("pageSize must be a positive integer")
        return {
            "scriptId": self.require_str(args, "scriptId", ("script_id",)),
            "pageSize": page_size,
            "pageToken": self.optional_str(args, "pageToken"),
            "fields": self.optional_str(args, "fields"),
            "key": self.optional_str(args, "key"),
            "prettyPrint": self.optional_bool(args, "prettyPrint", DEFAULT_PRETTY_PRINT),
        }

    @staticmethod
    def build_query(params: dict[str, Any]) -> Query:
        query: Query = [("pageSize", str(params["pageSize"]))]
        if params["pageToken"]:
            query.append(("pageToken", params["pageToken"]))
        if params["fields"]:
            query.append(("fields", params["fields"]))
        # Only JSON is supported for this endpoint
        query.append(("alt", DEFAULT_ALT))
        if params["key"]:
            query.append(("key", params["key"]))
        if params["prettyPrint"]:
            query.append(("prettyPrint", bool_str(True)))
        return query

    def build_url(self, script_id: str) -> str:
        return self.api_url("projects", self.quote_id(script_id), "versions")

    async def execute(self, params: dict[str, Any], started: int) -> ToolResult:
        script_id = params["scriptId"]
        logger.info(self.CATEGORY, "Starting script versions list request", {
            "scriptId": script_id,
            "pageSize": params["pageSize"],
            "pageToken": params["pageToken"],
        })

        token = await self.oauth.get_access_token()

        url = self.build_url(script_id)
        query = self.build_query(params)
        logger.debug(self.CATEGORY, "Constructed API URL", {
            "url": url,
            "pathSegments": url.split("://", 1)[-1].split("/")[1:],
            "queryParams": dict(query),
        })

        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }
        r = await self.send("GET", url, query, headers)

        if not r.is_success:
            self.raise_detailed(r, script_id, started)

        data = r.json()
        versions = data.get("versions") if isinstance(data, dict) else None
        logger.info(self.CATEGORY, "Successfully retrieved script versions", {
            "scriptId": script_id,
            "versionsCount": len(versions) if isinstance(versions, list) else 0,
            "hasNextPage": bool(isinstance(data, dict) and data.get("nextPageToken")),
            "duration": elapsed_ms(started),
        })
        return data

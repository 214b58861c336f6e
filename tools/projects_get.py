"""
Project-get tool: projects.get on the Apps Script API.

GET {base}/v1/projects/{scriptId}
"""
from typing import Any

from config import DEFAULT_PRETTY_PRINT, LOG_PROJECT_GET
from core.base_tool import BaseTool, Query
from lib.common import bool_str, elapsed_ms
from lib.logger import logger
from lib.types import ToolResult


class ProjectGetTool(BaseTool):
    """Fetch the metadata (title, owners, timestamps) of an Apps Script project."""

    NAME = "script_projects_get"
    DESCRIPTION = "Get metadata of a Google Apps Script project."
    CATEGORY = LOG_PROJECT_GET
    FAILURE_MESSAGE = "Error getting script project"
    TIMED = True
    REQUIRED = ("scriptId",)
    PARAMETERS = {
        "scriptId": {
            "type": "string",
            "description": "The ID of the script project.",
        },
        "fields": {
            "type": "string",
            "description": "Selector specifying which fields to include in a partial response.",
        },
        "prettyPrint": {
            "type": "boolean",
            "description": "Returns response with indentations and line breaks.",
        },
    }

    def parse_args(self, args: dict[str, Any]) -> dict[str, Any]:
        return {
            "scriptId": self.require_str(args, "scriptId", ("script_id",)),
            "fields": self.optional_str(args, "fields"),
            "prettyPrint": self.optional_bool(args, "prettyPrint", DEFAULT_PRETTY_PRINT),
        }

    @staticmethod
    def build_query(params: dict[str, Any]) -> Query:
        query: Query = []
        if params["fields"]:
            query.append(("fields", params["fields"]))
        if params["prettyPrint"]:
            query.append(("prettyPrint", bool_str(True)))
        return query

    async def execute(self, params: dict[str, Any], started: int) -> ToolResult:
        script_id = params["scriptId"]
        headers = dict(await self.oauth.get_auth_headers())
        headers["Accept"] = "application/json"

        url = self.api_url("projects", self.quote_id(script_id))
        r = await self.send("GET", url, self.build_query(params), headers)

        if not r.is_success:
            self.raise_detailed(r, script_id, started)

        data = r.json()
        logger.info(self.CATEGORY, "Retrieved script project", {
            "scriptId": script_id,
            "title": data.get("title") if isinstance(data, dict) else None,
            "duration": elapsed_ms(started),
        })
        return data

"""
Apps Script Tools MCP Server

Exposes Google Apps Script REST API wrappers (scripts.run,
projects.versions.list, projects.get) as MCP tools.
Argument names are camelCase to match the Apps Script API exactly.
"""
import os
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from env_loader import get_port
from tools import ProjectGetTool, ScriptRunTool, VersionsListTool, tool_definitions

# Configure transport security for local serving
transport_security = TransportSecuritySettings(
    enable_dns_rebinding_protection=True,
    allowed_hosts=[
        f"localhost:{get_port()}",
        f"127.0.0.1:{get_port()}",
    ],
)

mcp = FastMCP("apps-script-tools", transport_security=transport_security)


def log(*a):
    print(*a, file=sys.stderr, flush=True)


def _drop_none(**kwargs: Any) -> dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


# ===== Script Tools =====

@mcp.tool()
async def script_run(
    scriptId: Any = None,
    functionName: Any = None,
    parameters: Any = None,
    devMode: Any = True,
    fields: str | None = None,
    alt: str | None = "json",
    key: str | None = None,
    access_token: str | None = None,
    oauth_token: str | None = None,
    quotaUser: str | None = None,
    prettyPrint: Any = True,
) -> dict:
    """Run a Google Apps Script function (scripts.run).

    Args:
    - scriptId: ID of the script project (required)
    - functionName: function to execute (required)
    - parameters: list of arguments passed to the function (default [])
    - devMode: run the latest saved code instead of the deployed version (default true)
    - fields / alt / quotaUser / prettyPrint: standard Google API display options

    Returns the API response as-is, e.g.
    {"done": true, "response": {"@type": "...ExecutionResponse", "result": ...}}
    or, on failure, {"error": true, "message": ..., "details": {...}, "rawError": {...}}.
    """
    tool = ScriptRunTool()
    return await tool(**_drop_none(
        scriptId=scriptId,
        functionName=functionName,
        parameters=parameters,
        devMode=devMode,
        fields=fields,
        alt=alt,
        key=key,
        access_token=access_token,
        oauth_token=oauth_token,
        quotaUser=quotaUser,
        prettyPrint=prettyPrint,
    ))


@mcp.tool()
async def script_projects_versions_list(
    scriptId: Any = None,
    pageSize: Any = 100,
    pageToken: str | None = None,
    fields: str | None = None,
    alt: str | None = "json",
    key: str | None = None,
    access_token: str | None = None,
    oauth_token: str | None = None,
    prettyPrint: Any = True,
) -> dict:
    """List the versions of a Google Apps Script project (projects.versions.list).

    Args:
    - scriptId: ID of the script project (required)
    - pageSize: versions per page (default 100)
    - pageToken: nextPageToken from a previous call

    Returns {"versions": [{"versionNumber", "description", "createTime"}], "nextPageToken"?}
    or the error envelope.
    """
    tool = VersionsListTool()
    return await tool(**_drop_none(
        scriptId=scriptId,
        pageSize=pageSize,
        pageToken=pageToken,
        fields=fields,
        alt=alt,
        key=key,
        access_token=access_token,
        oauth_token=oauth_token,
        prettyPrint=prettyPrint,
    ))


@mcp.tool()
async def script_projects_get(
    scriptId: Any = None,
    fields: str | None = None,
    prettyPrint: Any = True,
) -> dict:
    """Get metadata of a Google Apps Script project (projects.get).

    Returns {"scriptId", "title", "createTime", "updateTime", ...} or the error envelope.
    """
    tool = ProjectGetTool()
    return await tool(**_drop_none(scriptId=scriptId, fields=fields, prettyPrint=prettyPrint))


@mcp.tool()
async def tools_help() -> dict:
    """List the tools exposed by this server with their parameter schemas."""
    return {"tools": tool_definitions()}


# ===== Server Entry Point =====

if __name__ == "__main__":
    import uvicorn
    from contextlib import asynccontextmanager
    from starlette.applications import Starlette
    from starlette.routing import Route
    from starlette.responses import JSONResponse

    async def healthz(request):
        return JSONResponse({"status": "ok"})

    async def root(request):
        return JSONResponse(
            {"error": "Use /mcp for MCP endpoint or /healthz for health check"},
            status_code=406,
        )

    # Get MCP ASGI app
    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app):
        async with mcp.session_manager.run():
            yield

    # Create Starlette app for non-MCP routes
    starlette_app = Starlette(
        routes=[
            Route("/", root),
            Route("/healthz", healthz),
        ],
        lifespan=lifespan,
    )

    # Combined ASGI app - MCP app handles /mcp path internally
    async def combined_app(scope, receive, send):
        path = scope.get("path", "/")
        if path.startswith("/mcp"):
            await mcp_app(scope, receive, send)
        else:
            await starlette_app(scope, receive, send)

    port = get_port()
    host = os.getenv("HOST", "127.0.0.1")
    log(f"Starting server on {host}:{port}")
    uvicorn.run(combined_app, host=host, port=port, lifespan="on")

"""
Apps Script API tools.

Each tool pairs a declarative schema with an async callable:

    tool = get_tool("script_run")
    result = await tool(scriptId="...", functionName="main")
"""
from core.base_tool import BaseTool
from lib.types import ToolDefinition
from oauth_helper import OAuthHelper

from .projects_get import ProjectGetTool
from .projects_versions_list import VersionsListTool
from .script_run import ScriptRunTool

TOOLS: dict[str, type[BaseTool]] = {
    cls.NAME: cls for cls in (ScriptRunTool, VersionsListTool, ProjectGetTool)
}


def get_tool(name: str, oauth: OAuthHelper | None = None) -> BaseTool:
    """Instantiate a tool by name. Raises KeyError for unknown names."""
    try:
        cls = TOOLS[name]
    except KeyError:
        raise KeyError(f"unknown tool: {name}") from None
    return cls(oauth)


def tool_definitions() -> list[ToolDefinition]:
    """Schemas of all tools, in registration order."""
    return [cls.definition() for cls in TOOLS.values()]


__all__ = [
    "TOOLS",
    "ScriptRunTool",
    "VersionsListTool",
    "ProjectGetTool",
    "get_tool",
    "tool_definitions",
]

"""
scripts.run check against a real Apps Script project.

Usage:
    python scripts/script_run_check.py [SCRIPT_ID] [FUNCTION_NAME]

Runs FUNCTION_NAME (default: testFunction) with no parameters against the
deployed version (devMode=false). The target project must be deployed as an
API executable and share its Cloud project with the OAuth client.
"""
import asyncio
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from env_loader import get_script_id
from tools import ScriptRunTool


async def main(script_id: str, function_name: str) -> int:
    print("Testing script.run functionality...\n")

    tool = ScriptRunTool()
    body = ScriptRunTool.build_body({
        "functionName": function_name,
        "parameters": [],
        "devMode": False,
    })
    print("Calling script.run API...")
    print(f"URL: {tool.build_url(script_id)}")
    print("Body:", json.dumps(body))

    data = await tool(scriptId=script_id, functionName=function_name, parameters=[], devMode=False)
    print("Response:", json.dumps(data, indent=2, ensure_ascii=False))

    if not data.get("error"):
        print("\nOK  script.run is working!")
        return 0
    print("\nNG  script.run failed")
    return 2


if __name__ == "__main__":
    sid = sys.argv[1] if len(sys.argv) > 1 else get_script_id()
    fn = sys.argv[2] if len(sys.argv) > 2 else "testFunction"
    sys.exit(asyncio.run(main(sid, fn)))

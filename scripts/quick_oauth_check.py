"""
Quick OAuth check: obtain a bearer token and fetch project metadata.

Usage:
    python scripts/quick_oauth_check.py [SCRIPT_ID]

SCRIPT_ID falls back to the SCRIPT_ID environment variable.
Exit code 0 on success, 2 on failure.
"""
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from env_loader import get_script_id
from lib.common import mask_token
from oauth_helper import get_auth_headers, get_oauth_helper
from tools import ProjectGetTool


async def main(script_id: str) -> int:
    print("Testing OAuth authentication...\n")

    try:
        headers = await get_auth_headers()
    except Exception as e:
        print(f"OAUTH_CHECK: ERROR {type(e).__name__}: {str(e)[:400]}")
        return 2
    print("OK  got auth headers")
    print(f"    Authorization: {mask_token(headers['Authorization'], keep=50)}")

    print("\nTesting API call - fetching script info...")
    data = await ProjectGetTool(get_oauth_helper())(scriptId=script_id)

    if data.get("error") is True:
        print("\nNG  API call failed:", data.get("message"))
        return 2

    print("\nOK  OAuth is working! Script info:")
    print(f"    Title: {data.get('title')}")
    print(f"    Script ID: {data.get('scriptId')}")
    print(f"    Last modified: {data.get('updateTime')}")
    return 0


if __name__ == "__main__":
    sid = sys.argv[1] if len(sys.argv) > 1 else get_script_id()
    sys.exit(asyncio.run(main(sid)))

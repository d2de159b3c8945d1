"""Search and call — standalone demo of the agent-side Unifai tools.

Run with: python scripts/search_and_call.py "echo" [action] [json-payload]
Requires: UNIFAI_AGENT_API_KEY
"""

import asyncio
import json
import os
import sys

from unifai import ApiError, ToolSet


async def main(argv: list[str]) -> int:
    api_key = os.environ.get("UNIFAI_AGENT_API_KEY")
    if not api_key:
        print("UNIFAI_AGENT_API_KEY not set", file=sys.stderr)
        return 1

    query = argv[0] if argv else "echo"
    tools = ToolSet.from_api_key(api_key)

    print("=" * 60)
    print("  UNIFAI — Search and call")
    print("=" * 60)
    print()

    try:
        print(f"[1/2] Searching for {query!r}...")
        found = json.loads(await tools.call("search_services", {"query": query, "limit": 10}))
        for entry in found:
            print(f"       {entry.get('action')}: {entry.get('description', '')}")
        if not found:
            print("       Nothing found.")
            return 0

        action = argv[1] if len(argv) > 1 else found[0]["action"]
        payload = argv[2] if len(argv) > 2 else "{}"
        print(f"[2/2] Calling {action} with {payload}...")
        print("      ", await tools.call("invoke_service", {"action": action, "payload": payload}))
    except ApiError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1
    finally:
        await tools.aclose()

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))

#!/usr/bin/env python3
"""Sample script using the approvals service without the MCP server.

Prints the approval state of a merge request. Configure the instance and
token with KEPLER_MCP_GITLAB_URL and KEPLER_MCP_GITLAB_TOKEN.

    python servers/sample_server.py mygroup/myproject 42
"""

from __future__ import annotations

import asyncio
import sys

from kepler_mcp_approvals.config import load_config
from kepler_mcp_approvals.context import get_gitlab_client
from kepler_mcp_approvals.gitlab import MergeRequestApprovalsService
from kepler_mcp_approvals.logging_config import setup_logging


async def main(project_id: str, merge_request_iid: int) -> None:
    """Print who approved a merge request and how many approvals are left."""
    config = load_config()
    setup_logging(config)

    async with get_gitlab_client(config) as client:
        approvals = await MergeRequestApprovalsService(client).get_merge_request_approvals(
            project_id, merge_request_iid
        )

    print(f"!{merge_request_iid}: {approvals.approvals_left} approval(s) left")
    for username in approvals.approver_usernames:
        print(f"  approved by {username}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1], int(sys.argv[2])))

"""MCP tools exposing the merge request approvals API."""

from kepler_mcp_approvals.tools.approvals import register_approval_tools

__all__ = [
    "register_approval_tools",
]

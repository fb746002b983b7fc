"""Tests for approval tools."""

from __future__ import annotations

import asyncio
import inspect
import json
from typing import TYPE_CHECKING, Any

import pytest
import respx
from fastmcp import FastMCP
from httpx import Response

from kepler_mcp_approvals.tools.approvals import register_approval_tools

if TYPE_CHECKING:
    from kepler_mcp_approvals.config import Config

API_URL = "https://gitlab.example.com/api/v4"


def get_tool_names_sync(app: FastMCP) -> set[str]:
    """Synchronously get tool names from FastMCP app."""
    tools = asyncio.run(app.get_tools())
    return set(tools.keys())


async def call_tool(app: FastMCP, name: str, arguments: dict[str, Any]) -> Any:
    """Call a registered tool function directly."""
    tools = await app.get_tools()
    result = tools[name].fn(**arguments)
    return await result if inspect.isawaitable(result) else result


class TestApprovalToolsRegistration:
    """Tests for approval tools registration."""

    @pytest.fixture
    def app_with_approval_tools(self, gitlab_config: Config) -> FastMCP:
        """Create an app with approval tools registered."""
        app = FastMCP("test")
        register_approval_tools(app, gitlab_config)
        return app

    def test_all_tools_registered(self, app_with_approval_tools: FastMCP) -> None:
        """Test that every approval tool is registered."""
        tools = get_tool_names_sync(app_with_approval_tools)
        expected_tools = {
            "approve_merge_request",
            "unapprove_merge_request",
            "get_merge_request_approvals",
            "change_merge_request_approval_configuration",
            "change_merge_request_allowed_approvers",
            "get_project_approval_configuration",
            "change_project_approval_configuration",
            "get_gitlab_config",
        }
        assert expected_tools.issubset(tools)


class TestApprovalToolCalls:
    """Tests for calling approval tools against a mocked GitLab."""

    @pytest.fixture
    def app(self, gitlab_config: Config) -> FastMCP:
        app = FastMCP("test")
        register_approval_tools(app, gitlab_config)
        return app

    @respx.mock
    async def test_approve_sends_token(self, app: FastMCP) -> None:
        """Test approving uses the configured token and returns JSON data."""
        route = respx.post(f"{API_URL}/projects/group%2Fproject/merge_requests/7/approve").mock(
            return_value=Response(
                201,
                json={
                    "iid": 7,
                    "approvals_left": 0,
                    "updated_at": "2024-01-02T03:04:05Z",
                    "approved_by": [{"user": {"id": 1, "username": "root"}}],
                },
            )
        )

        result = await call_tool(
            app,
            "approve_merge_request",
            {"project_id": "group/project", "merge_request_iid": 7, "sha": "abc123"},
        )

        request = route.calls[0].request
        assert request.headers["PRIVATE-TOKEN"] == "glpat-test-token"
        assert json.loads(request.content) == {"sha": "abc123"}
        assert result["approvals_left"] == 0
        assert result["updated_at"] == "2024-01-02T03:04:05Z"
        assert result["approved_by"] == [{"user": {"id": 1, "username": "root"}}]

    @respx.mock
    async def test_unapprove(self, app: FastMCP) -> None:
        """Test unapproving returns a confirmation."""
        respx.post(f"{API_URL}/projects/1/merge_requests/7/unapprove").mock(
            return_value=Response(201)
        )

        result = await call_tool(
            app, "unapprove_merge_request", {"project_id": "1", "merge_request_iid": 7}
        )

        assert result == {"status": "unapproved", "project_id": "1", "merge_request_iid": 7}

    @respx.mock
    async def test_get_merge_request_approvals(self, app: FastMCP) -> None:
        """Test reading approvals returns the decoded state."""
        route = respx.get(f"{API_URL}/projects/group%2Fproject/merge_requests/7/approvals").mock(
            return_value=Response(
                200,
                json={
                    "iid": 7,
                    "approvals_required": 2,
                    "approvals_left": 1,
                    "approvers": None,
                    "approved_by": [{"user": {"id": 1, "username": "root"}}],
                },
            )
        )

        result = await call_tool(
            app,
            "get_merge_request_approvals",
            {"project_id": "group/project", "merge_request_iid": 7},
        )

        assert route.calls[0].request.headers["PRIVATE-TOKEN"] == "glpat-test-token"
        assert result["approvals_left"] == 1
        assert result["approvers"] == []
        assert result["approved_by"] == [{"user": {"id": 1, "username": "root"}}]

    @respx.mock
    async def test_change_approval_configuration(self, app: FastMCP) -> None:
        """Test the required approval count is posted."""
        route = respx.post(f"{API_URL}/projects/1/merge_requests/7/approvals").mock(
            return_value=Response(201, json={"iid": 7, "approvals_before_merge": 2})
        )

        result = await call_tool(
            app,
            "change_merge_request_approval_configuration",
            {"project_id": "1", "merge_request_iid": 7, "approvals_required": 2},
        )

        assert json.loads(route.calls[0].request.content) == {"approvals_required": 2}
        assert result["approvals_before_merge"] == 2

    @respx.mock
    async def test_change_allowed_approvers(self, app: FastMCP) -> None:
        """Test only the given approver lists are sent."""
        route = respx.put(f"{API_URL}/projects/1/merge_requests/7/approvers").mock(
            return_value=Response(200, json={"id": 70, "iid": 7, "title": "Fix"})
        )

        result = await call_tool(
            app,
            "change_merge_request_allowed_approvers",
            {"project_id": "1", "merge_request_iid": 7, "approver_ids": [5]},
        )

        assert json.loads(route.calls[0].request.content) == {"approver_ids": [5]}
        assert result["title"] == "Fix"

    @respx.mock
    async def test_get_project_configuration(self, app: FastMCP) -> None:
        """Test the project configuration is read with GET."""
        respx.get(f"{API_URL}/projects/1/approvals").mock(
            return_value=Response(
                200,
                json={"approvals_before_merge": 2, "reset_approvals_on_push": True},
            )
        )

        result = await call_tool(app, "get_project_approval_configuration", {"project_id": "1"})

        assert result["approvals_before_merge"] == 2
        assert result["reset_approvals_on_push"] is True

    @respx.mock
    async def test_change_project_configuration(self, app: FastMCP) -> None:
        """Test unset project settings are left out of the request."""
        route = respx.post(f"{API_URL}/projects/1/approvals").mock(
            return_value=Response(201, json={"approvals_before_merge": 1})
        )

        result = await call_tool(
            app,
            "change_project_approval_configuration",
            {"project_id": "1", "reset_approvals_on_push": True},
        )

        assert json.loads(route.calls[0].request.content) == {"reset_approvals_on_push": True}
        assert result["approvals_before_merge"] == 1

    async def test_get_gitlab_config_hides_token(self, app: FastMCP) -> None:
        """Test the config tool reports the auth method, not the token."""
        result = await call_tool(app, "get_gitlab_config", {})

        assert result == {"gitlab_url": "https://gitlab.example.com", "auth_method": "token"}

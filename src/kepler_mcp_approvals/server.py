"""MCP server creation and tool registration.

Provides the factory for the FastMCP application that exposes the
merge request approval tools.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from kepler_mcp_approvals.logging_config import get_logger
from kepler_mcp_approvals.tools.approvals import register_approval_tools

if TYPE_CHECKING:
    from collections.abc import Callable

    from kepler_mcp_approvals.config import Config

logger = get_logger(__name__)


def create_app(
    config: Config,
    extra_tool_registrars: list[Callable[[Any, Config], None]] | None = None,
) -> FastMCP:
    """Create and configure a FastMCP application instance.

    Args:
        config: Application configuration
        extra_tool_registrars: Optional list of additional tool
            registration functions

    Returns:
        Configured FastMCP instance
    """
    app = FastMCP(config.app_name)

    logger.info(
        "Creating MCP server '%s' for %s (environment: %s)",
        config.app_name,
        config.gitlab_url,
        config.environment.value,
    )

    register_approval_tools(app, config)

    for registrar in extra_tool_registrars or []:
        registrar(app, config)

    logger.debug("MCP server created with all tools registered")

    return app


async def run_stdio(app: FastMCP) -> None:
    """Run the MCP server using stdio transport.

    Reads JSON-RPC messages from stdin and writes responses to stdout.

    Args:
        app: FastMCP application instance
    """
    logger.info("Starting MCP server in stdio mode")
    await app.run_stdio_async()

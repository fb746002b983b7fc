"""Client construction for MCP tools.

Tools call ``get_gitlab_client`` for every invocation and close the
client when done, so no connection outlives a tool call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kepler_mcp_approvals.gitlab.client import GitLabClient
from kepler_mcp_approvals.logging_config import get_logger
from kepler_mcp_approvals.security import NoAuthStrategy, build_auth_strategy

if TYPE_CHECKING:
    from kepler_mcp_approvals.config import Config

logger = get_logger(__name__)


def get_auth_method(config: Config) -> str:
    """Name of the auth method a client built from ``config`` would use."""
    if isinstance(build_auth_strategy(config), NoAuthStrategy):
        return "none"
    return "token"


def get_gitlab_client(config: Config) -> GitLabClient:
    """Create a GitLab client for the configured instance.

    Args:
        config: Application configuration

    Returns:
        GitLabClient authenticated with the configured token, if any
    """
    auth_strategy = build_auth_strategy(config)
    if isinstance(auth_strategy, NoAuthStrategy):
        logger.warning("No GitLab token configured, using unauthenticated access")
    return GitLabClient(
        config.gitlab_url,
        auth_strategy,
        timeout=config.request_timeout,
    )

"""Kepler MCP Approvals.

Typed async bindings and MCP tools for the GitLab merge request approvals API.
"""

__version__ = "0.1.0"

from kepler_mcp_approvals.config import Config, ConfigError, load_config
from kepler_mcp_approvals.server import create_app

__all__ = [
    "Config",
    "ConfigError",
    "__version__",
    "create_app",
    "load_config",
]

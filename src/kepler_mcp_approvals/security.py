"""Security utilities for Kepler MCP Approvals.

Provides token redaction for logs and the authentication strategies
used by the GitLab client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from kepler_mcp_approvals.logging_config import get_logger

if TYPE_CHECKING:
    from kepler_mcp_approvals.config import Config

logger = get_logger(__name__)

# Header GitLab reads personal, project and group access tokens from
GITLAB_TOKEN_HEADER = "PRIVATE-TOKEN"


def redact(value: str | None) -> str:
    """Redact a potentially sensitive value for safe logging.

    Args:
        value: The value to redact

    Returns:
        "***" if value is non-empty, "<empty>" if empty/None
    """
    if value is None or value == "":
        return "<empty>"
    return "***"


class AuthStrategy(ABC):
    """Abstract base class for authentication strategies.

    Authentication strategies provide a consistent interface for
    obtaining authorization headers for API calls.
    """

    @abstractmethod
    async def get_auth_headers(self) -> dict[str, str]:
        """Get authorization headers for an API request.

        Returns:
            Dictionary of headers to include in the request
        """


class NoAuthStrategy(AuthStrategy):
    """Unauthenticated access. Only public projects are readable."""

    async def get_auth_headers(self) -> dict[str, str]:
        """Return empty headers."""
        return {}


class StaticTokenAuthStrategy(AuthStrategy):
    """Authentication strategy using a static token.

    Suitable for personal or project access tokens.
    """

    def __init__(self, header_name: str, token_value: str) -> None:
        """Initialize with header name and token value.

        Args:
            header_name: Name of the header (e.g., "PRIVATE-TOKEN")
            token_value: Token value
        """
        self._header_name = header_name
        self._token_value = token_value

    async def get_auth_headers(self) -> dict[str, str]:
        """Return the static token header."""
        return {self._header_name: self._token_value}

    def __repr__(self) -> str:
        return f"StaticTokenAuthStrategy({self._header_name!r}, {redact(self._token_value)!r})"


def build_auth_strategy(config: Config) -> AuthStrategy:
    """Build an AuthStrategy from configuration.

    Uses the configured GitLab access token when one is set,
    otherwise falls back to unauthenticated access.

    Args:
        config: Application configuration

    Returns:
        Configured AuthStrategy instance
    """
    if config.gitlab_token:
        logger.debug("Using StaticTokenAuthStrategy")
        return StaticTokenAuthStrategy(
            GITLAB_TOKEN_HEADER,
            config.gitlab_token.get_secret_value(),
        )

    logger.debug("Using NoAuthStrategy")
    return NoAuthStrategy()


def mask_sensitive_data(
    data: dict[str, Any], sensitive_keys: set[str] | None = None
) -> dict[str, Any]:
    """Mask sensitive data in a dictionary for logging.

    Args:
        data: Dictionary potentially containing sensitive data
        sensitive_keys: Set of keys to mask (uses defaults if not provided)

    Returns:
        Copy of dictionary with sensitive values masked
    """
    if sensitive_keys is None:
        sensitive_keys = {
            "token",
            "secret",
            "password",
            "authorization",
        }

    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = mask_sensitive_data(value, sensitive_keys)
        elif any(sensitive in key.lower() for sensitive in sensitive_keys):
            result[key] = "***"
        else:
            result[key] = value

    return result

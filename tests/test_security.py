"""Tests for security module."""

from __future__ import annotations

from kepler_mcp_approvals.config import Config
from kepler_mcp_approvals.security import (
    GITLAB_TOKEN_HEADER,
    NoAuthStrategy,
    StaticTokenAuthStrategy,
    build_auth_strategy,
    mask_sensitive_data,
    redact,
)


class TestRedact:
    """Tests for redact function."""

    def test_redact_non_empty(self) -> None:
        """Test that non-empty values are redacted."""
        assert redact("secret123") == "***"

    def test_redact_empty(self) -> None:
        """Test that empty values show <empty>."""
        assert redact("") == "<empty>"
        assert redact(None) == "<empty>"


class TestMaskSensitiveData:
    """Tests for mask_sensitive_data function."""

    def test_masks_sensitive_keys(self) -> None:
        """Test that sensitive keys are masked."""
        data = {"project_id": "group/project", "gitlab_token": "glpat-abc"}
        masked = mask_sensitive_data(data)

        assert masked["project_id"] == "group/project"
        assert masked["gitlab_token"] == "***"

    def test_handles_nested_dicts(self) -> None:
        """Test that nested dicts are handled."""
        data = {"headers": {"PRIVATE-TOKEN": "glpat-abc", "Accept": "application/json"}}
        masked = mask_sensitive_data(data)

        assert masked["headers"]["PRIVATE-TOKEN"] == "***"
        assert masked["headers"]["Accept"] == "application/json"


class TestAuthStrategies:
    """Tests for authentication strategies."""

    async def test_no_auth_strategy(self) -> None:
        """Test NoAuthStrategy returns empty headers."""
        headers = await NoAuthStrategy().get_auth_headers()
        assert headers == {}

    async def test_static_token_strategy(self) -> None:
        """Test StaticTokenAuthStrategy returns token header."""
        strategy = StaticTokenAuthStrategy(GITLAB_TOKEN_HEADER, "glpat-abc")
        headers = await strategy.get_auth_headers()
        assert headers == {"PRIVATE-TOKEN": "glpat-abc"}

    def test_static_token_repr_redacted(self) -> None:
        """Test the token does not appear in repr."""
        strategy = StaticTokenAuthStrategy(GITLAB_TOKEN_HEADER, "glpat-abc")
        assert "glpat-abc" not in repr(strategy)


class TestBuildAuthStrategy:
    """Tests for build_auth_strategy function."""

    def test_no_auth_by_default(self) -> None:
        """Test that NoAuthStrategy is returned by default."""
        strategy = build_auth_strategy(Config())
        assert isinstance(strategy, NoAuthStrategy)

    async def test_private_token_with_gitlab_token(self) -> None:
        """Test that a configured token is sent as PRIVATE-TOKEN."""
        config = Config(gitlab_token="glpat-abc")  # type: ignore[arg-type]
        strategy = build_auth_strategy(config)

        assert isinstance(strategy, StaticTokenAuthStrategy)
        assert await strategy.get_auth_headers() == {"PRIVATE-TOKEN": "glpat-abc"}

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from kepler_mcp_approvals.config import Config, Environment, LogLevel
from kepler_mcp_approvals.gitlab.client import GitLabClient
from kepler_mcp_approvals.security import NoAuthStrategy

GITLAB_URL = "https://gitlab.example.com"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep KEPLER_MCP_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("KEPLER_MCP_"):
            monkeypatch.delenv(key)


@pytest.fixture
def default_config() -> Config:
    """Create a default configuration for testing."""
    return Config()


@pytest.fixture
def dev_config() -> Config:
    """Create a development configuration for testing."""
    return Config(
        app_name="Test Approvals Server",
        log_level=LogLevel.DEBUG,
        environment=Environment.DEV,
    )


@pytest.fixture
def gitlab_config() -> Config:
    """Create a configuration with GitLab settings for testing."""
    return Config(
        app_name="GitLab Test Server",
        gitlab_url=GITLAB_URL,
        gitlab_token="glpat-test-token",
    )


@pytest.fixture
def client() -> GitLabClient:
    """Create an unauthenticated GitLab client for testing."""
    return GitLabClient(GITLAB_URL, NoAuthStrategy())

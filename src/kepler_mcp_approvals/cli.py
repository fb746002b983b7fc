"""Command-line interface for Kepler MCP Approvals."""

from __future__ import annotations

import asyncio
import sys

import typer

from kepler_mcp_approvals import __version__
from kepler_mcp_approvals.config import ConfigError, load_config
from kepler_mcp_approvals.logging_config import get_logger, setup_logging

app = typer.Typer(
    name="kepler-mcp-approvals",
    help="MCP server for GitLab merge request approvals",
    add_completion=False,
)


def _version_lines() -> list[str]:
    lines = [f"kepler-mcp-approvals version {__version__}"]
    try:
        import fastmcp

        lines.append(f"fastmcp version {fastmcp.__version__}")
    except (ImportError, AttributeError):
        lines.append("fastmcp version unknown")
    lines.append(f"Python {sys.version}")
    return lines


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        for line in _version_lines():
            typer.echo(line)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Kepler MCP Approvals CLI."""


@app.command()
def serve(
    config_path: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file (JSON or YAML)",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    gitlab_url: str | None = typer.Option(
        None,
        "--gitlab-url",
        "-g",
        help="GitLab instance base URL",
    ),
) -> None:
    """Run the MCP server over stdio.

    The GitLab token is read from KEPLER_MCP_GITLAB_TOKEN (or .env) so
    it never shows up in the process list.
    """
    cli_args: dict[str, str | None] = {
        "log_level": log_level,
        "gitlab_url": gitlab_url,
    }

    try:
        config = load_config(path=config_path, cli_args=cli_args)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1) from None

    setup_logging(config)
    logger = get_logger(__name__)
    logger.info(
        "Starting Kepler MCP Approvals (app: %s, env: %s, gitlab: %s)",
        config.app_name,
        config.environment.value,
        config.gitlab_url,
    )

    from kepler_mcp_approvals.server import create_app, run_stdio

    try:
        asyncio.run(run_stdio(create_app(config)))
    except KeyboardInterrupt:
        logger.info("Shutting down (keyboard interrupt)")
        raise typer.Exit(code=0) from None
    except Exception as e:
        logger.exception("Server stopped with an error")
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(code=1) from None


@app.command()
def version() -> None:
    """Print version information."""
    for line in _version_lines():
        typer.echo(line)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

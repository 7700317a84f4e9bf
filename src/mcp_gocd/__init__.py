"""MCP server for the GoCD pipeline API."""

import asyncio
import os
import sys

import click
from dotenv import load_dotenv
from loguru import logger


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="MCP transport type",
)
@click.option("--port", default=8000, help="Port for HTTP transports")
@click.option("--host", default="127.0.0.1", help="Host for HTTP transports")
@click.option("--gocd-url", envvar="GOCD_URL", help="GoCD server URL")
@click.option("--gocd-username", envvar="GOCD_USERNAME", help="GoCD username for basic auth")
@click.option("--gocd-password", envvar="GOCD_PASSWORD", help="GoCD password for basic auth")
@click.option("--gocd-token", envvar="GOCD_TOKEN", help="GoCD personal access token")
@click.option("--read-only", is_flag=True, help="Disable write operations")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for stderr output",
)
def main(
    transport: str,
    port: int,
    host: str,
    gocd_url: str | None,
    gocd_username: str | None,
    gocd_password: str | None,
    gocd_token: str | None,
    read_only: bool,
    log_level: str,
) -> None:
    """Run the GoCD MCP server."""
    load_dotenv()

    # stdout carries the stdio transport
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper())

    if gocd_url:
        os.environ["GOCD_URL"] = gocd_url
    if gocd_username:
        os.environ["GOCD_USERNAME"] = gocd_username
    if gocd_password:
        os.environ["GOCD_PASSWORD"] = gocd_password
    if gocd_token:
        os.environ["GOCD_TOKEN"] = gocd_token
    if read_only:
        os.environ["GOCD_READ_ONLY"] = "true"

    from .servers.gocd import mcp

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs["host"] = host
        run_kwargs["port"] = port

    logger.info("Starting GoCD MCP server ({} transport)", transport)
    asyncio.run(mcp.run_async(show_banner=False, **run_kwargs))


if __name__ == "__main__":
    main()

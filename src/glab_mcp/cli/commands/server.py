"""MCP server commands."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from glab_mcp.adapters import GlabAdapter
from glab_mcp.config import MCPConfig
from glab_mcp.dispatcher import Dispatcher
from glab_mcp.server import MCPServer, StartupFailure
from glab_mcp.tools import list_tools

app = typer.Typer(help="GitLab issue MCP server backed by the glab CLI")
console = Console()
# stdout carries the stdio protocol, so server diagnostics go to stderr
err_console = Console(stderr=True)

READY_MESSAGE = "GitLab MCP server started"


def _configure_logging(level: str):
    """Send log records to stderr at the configured level."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def start(
    host: str = typer.Option(None, help="Server host (SSE only, overrides config)"),
    port: int = typer.Option(None, help="Server port (SSE only, overrides config)"),
    transport: str = typer.Option(None, help="Transport: stdio or sse (overrides config)"),
    program: str = typer.Option(None, help="glab executable to run (overrides config)"),
    log_level: str = typer.Option(None, help="Logging level, e.g. INFO or DEBUG (overrides config)"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to YAML config file"),
):
    """
    Start the MCP server.

    Configuration is loaded from .glab-mcp.yaml (or --config) if it exists.
    Environment variables override the config file; command-line options
    override both.

    Examples:
        # Start with stdio transport (uses config or defaults)
        gitlab-mcp start

        # Start with SSE transport
        gitlab-mcp start --transport sse --host 0.0.0.0 --port 8000
    """
    try:
        config = MCPConfig.load(config_file)

        # Override config with CLI options (if provided)
        if host is not None:
            config.host = host
        if port is not None:
            config.port = port
        if transport is not None:
            config.transport = transport
        if program is not None:
            config.program = program
        if log_level is not None:
            config.log_level = log_level

        _configure_logging(config.log_level)

        server = MCPServer(
            host=config.host,
            port=config.port,
            transport=config.transport,
            program=config.program,
        )

        err_console.print(READY_MESSAGE)
        if config.transport == "sse":
            err_console.print(f"Listening on {config.host}:{config.port}")

        server.start()
    except ValueError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    except StartupFailure as e:
        err_console.print(f"[red]Fatal error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Server stopped by user[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        err_console.print(f"[red]Fatal error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def tools():
    """
    List the issue tools this server exposes.

    Examples:
        gitlab-mcp tools
    """
    table = Table(title="GitLab MCP Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Required")
    table.add_column("Optional")
    table.add_column("Description")

    for definition in list_tools():
        optional = [p.key for p in definition.parameters if not p.required]
        table.add_row(
            definition.name,
            ", ".join(definition.required) or "-",
            ", ".join(optional) or "-",
            definition.description,
        )

    console.print(table)


@app.command()
def call(
    tool: str = typer.Argument(..., help="Tool name, e.g. issue_view"),
    arguments: str = typer.Argument("{}", help="Tool arguments as a JSON object"),
    program: str = typer.Option(None, help="glab executable to run (overrides config)"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to YAML config file"),
):
    """
    Run a single tool call and print its output.

    Exits with status 1 when the call fails.

    Examples:
        gitlab-mcp call issue_view '{"issue_id": 42, "comments": true}'
    """
    try:
        config = MCPConfig.load(config_file)
        parsed = json.loads(arguments)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Invalid arguments JSON:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    if not isinstance(parsed, dict):
        err_console.print("[red]Invalid arguments JSON:[/red] expected an object")
        raise typer.Exit(1)

    dispatcher = Dispatcher(GlabAdapter(program or config.program))
    result = asyncio.run(dispatcher.handle_invoke(tool, parsed))

    # glab output is passed through untouched (no rich markup)
    typer.echo(result.text)
    if not result.success:
        raise typer.Exit(1)

"""
MCP (Model Context Protocol) server for GitLab issues.

Exposes glab issue operations (list, view, create, update, close, reopen,
note) as MCP tools and fulfills each call by running the glab CLI.

Architecture:
- tools/: Tool catalog and argument translation to glab argv
- adapters/: glab process adapter and CallResult
- dispatcher.py: Call routing and result normalization
- server.py: FastMCP server initialization and configuration
- config.py: Configuration loading
- cli/: typer command-line interface
"""

__version__ = "1.0.0"

__all__ = ["Dispatcher", "MCPConfig", "MCPServer", "__version__"]

from .config import MCPConfig
from .dispatcher import Dispatcher
from .server import MCPServer

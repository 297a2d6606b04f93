"""
FastMCP server initialization and configuration.

Main server class that handles MCP protocol communication and registers one
MCP tool per catalog entry. Supports both stdio and SSE transports.
"""

import logging
import socket
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import Field

from glab_mcp.adapters import GlabAdapter
from glab_mcp.dispatcher import Dispatcher
from glab_mcp.tools import ToolDefinition, ToolNotFound, lookup

logger = logging.getLogger(__name__)

SERVER_NAME = "gitlab-mcp"


class StartupFailure(RuntimeError):
    """Raised when the MCP transport cannot be started."""
    pass


class GlabTool(Tool):
    """FastMCP tool that forwards its raw arguments to the Dispatcher."""

    dispatcher: Any = Field(default=None, exclude=True, repr=False)

    @classmethod
    def from_definition(cls, definition: ToolDefinition, dispatcher: Dispatcher) -> "GlabTool":
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema,
            dispatcher=dispatcher,
        )

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        result = await self.dispatcher.handle_invoke(self.name, arguments)
        if not result.success:
            # FastMCP reports ToolError messages as isError results
            raise ToolError(result.text)
        return ToolResult(content=[TextContent(type="text", text=result.text)])


class UnknownToolMiddleware(Middleware):
    """Answers calls to tools outside the catalog through the Dispatcher."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        try:
            lookup(name)
        except ToolNotFound:
            result = await self.dispatcher.handle_invoke(name, context.message.arguments)
            raise ToolError(result.text)
        return await call_next(context)


@dataclass
class MCPServer:
    """
    Main MCP server instance exposing glab issue operations.

    Attributes:
        host: Server bind address (default: "127.0.0.1", SSE only)
        port: Server port (default: 8000, SSE only)
        transport: Transport mode ("stdio" or "sse")
        program: glab executable the tools run (default: "glab")
    """

    host: str = "127.0.0.1"
    port: int = 8000
    transport: Literal["stdio", "sse"] = "stdio"
    program: str = "glab"
    dispatcher: Optional[Dispatcher] = None
    _app: Optional[FastMCP] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.transport not in ("stdio", "sse"):
            raise ValueError(
                f"Invalid transport '{self.transport}'. "
                "Must be 'stdio' or 'sse'."
            )

        if self.dispatcher is None:
            self.dispatcher = Dispatcher(GlabAdapter(self.program))

        self._app = FastMCP(SERVER_NAME)
        self._app.add_middleware(UnknownToolMiddleware(self.dispatcher))
        self._register_tools()

    def _check_port_available(self, host: str, port: int) -> bool:
        """
        Check if port is available for binding.

        Args:
            host: Host address to check
            port: Port number to check

        Returns:
            True if port is available, False otherwise
        """
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
                return True
        except OSError:
            return False

    def _register_tools(self):
        """Register every catalog tool with the FastMCP app."""
        for definition in self.dispatcher.handle_list_capabilities():
            self._app.add_tool(GlabTool.from_definition(definition, self.dispatcher))
            logger.info("Registered %s tool with MCP server", definition.name)

    def start(self):
        """
        Start the MCP server with configured transport.

        Raises:
            StartupFailure: If port unavailable (SSE) or FastMCP fails to start
        """
        if not self._app:
            raise StartupFailure("FastMCP app not initialized. This should not happen.")

        if self.transport == "stdio":
            # stdout carries JSON-RPC messages; diagnostics go to stderr
            try:
                self._app.run()
            except Exception as e:
                raise StartupFailure(f"Failed to start MCP server with stdio transport: {e}") from e

        elif self.transport == "sse":
            if not self._check_port_available(self.host, self.port):
                raise StartupFailure(
                    f"Port {self.port} already in use. "
                    f"Choose a different port or stop the conflicting service."
                )

            try:
                self._app.run(transport="sse", host=self.host, port=self.port)
            except Exception as e:
                raise StartupFailure(
                    f"Failed to start MCP server on {self.host}:{self.port}: {e}"
                ) from e

"""
Tool call dispatcher.

Routes one MCP tool call end to end: catalog lookup, argument validation,
translation to a glab argument vector, execution through the adapter, and
normalization of the outcome into a CallResult. Per-call errors never
escape; they come back as failure results.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from glab_mcp.adapters import CallResult, GlabAdapter
from glab_mcp.tools import (
    InvalidArguments,
    ToolDefinition,
    ToolNotFound,
    UnknownTool,
    build_args,
    list_tools,
    lookup,
    validate_arguments,
)

logger = logging.getLogger(__name__)


class Dispatcher:
    """Dispatches tool calls to glab through a GlabAdapter."""

    def __init__(self, adapter: Optional[GlabAdapter] = None):
        self.adapter = adapter or GlabAdapter()

    def handle_list_capabilities(self) -> List[ToolDefinition]:
        """Return the tool catalog."""
        return list_tools()

    async def handle_invoke(
        self,
        tool_name: str,
        arguments: Optional[Mapping[str, Any]] = None
    ) -> CallResult:
        """
        Run one tool call.

        Args:
            tool_name: Catalog tool name
            arguments: Call arguments (undeclared keys are ignored)

        Returns:
            CallResult for the call; unknown tools and invalid arguments are
            reported as failures without spawning anything
        """
        arguments = arguments or {}

        try:
            definition = lookup(tool_name)
            validate_arguments(definition, arguments)
            argv = build_args(definition.name, arguments)
        except (ToolNotFound, UnknownTool):
            logger.warning("Rejected call to unknown tool %r", tool_name)
            return CallResult.error_result(message=f"Unknown tool: {tool_name}")
        except InvalidArguments as e:
            logger.warning("Rejected call to %s: %s", tool_name, e)
            return CallResult.error_result(message=str(e))

        try:
            return await self.adapter.run(argv)
        except Exception as e:
            logger.exception("Error running %s", tool_name)
            return CallResult.error_result(message=str(e), argv=argv)

    async def invoke(
        self,
        tool_name: str,
        arguments: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Run one tool call and render the MCP response envelope."""
        result = await self.handle_invoke(tool_name, arguments)
        return result.to_dict()

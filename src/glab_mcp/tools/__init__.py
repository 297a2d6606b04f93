"""
MCP tool definitions for glab issue operations.

The catalog declares each tool and its input schema; issue_tools turns a
tool call into the glab argument vector that carries it out.
"""

from .catalog import (
    TOOLS,
    InvalidArguments,
    ParameterSpec,
    ToolDefinition,
    ToolNotFound,
    list_tools,
    lookup,
    validate_arguments,
)
from .issue_tools import (
    OPERATIONS,
    SKIP_CONFIRMATION_FLAG,
    IssueOperation,
    UnknownTool,
    build_args,
    build_operation,
)

__all__ = [
    # Catalog
    "TOOLS",
    "InvalidArguments",
    "ParameterSpec",
    "ToolDefinition",
    "ToolNotFound",
    "list_tools",
    "lookup",
    "validate_arguments",
    # Translation
    "OPERATIONS",
    "SKIP_CONFIRMATION_FLAG",
    "IssueOperation",
    "UnknownTool",
    "build_args",
    "build_operation",
]

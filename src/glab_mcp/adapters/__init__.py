"""
External command adapter layer for MCP tool calls.

Runs the glab program with a translated argument vector and normalizes
every outcome (output, nonzero exit, spawn failure) into a CallResult.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Returned when glab succeeds without printing anything
EMPTY_OUTPUT_MARKER = "Command completed successfully"


@dataclass
class CallResult:
    """Standardized result of one tool call."""

    success: bool
    message: str
    exit_code: Optional[int] = None
    argv: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Text shown to the MCP client."""
        return self.message if self.success else f"Error: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the MCP tool response envelope."""
        envelope: Dict[str, Any] = {
            "content": [{"type": "text", "text": self.text}],
        }
        if not self.success:
            envelope["isError"] = True
        return envelope

    @classmethod
    def success_result(
        cls,
        output: str,
        exit_code: Optional[int] = 0,
        argv: Optional[List[str]] = None
    ) -> "CallResult":
        """Create success result."""
        return cls(
            success=True,
            message=output or EMPTY_OUTPUT_MARKER,
            exit_code=exit_code,
            argv=argv or []
        )

    @classmethod
    def error_result(
        cls,
        message: str,
        exit_code: Optional[int] = None,
        argv: Optional[List[str]] = None
    ) -> "CallResult":
        """Create error result."""
        return cls(
            success=False,
            message=message,
            exit_code=exit_code,
            argv=argv or []
        )


from .cli_adapter import GlabAdapter

__all__ = ["CallResult", "EMPTY_OUTPUT_MARKER", "GlabAdapter"]

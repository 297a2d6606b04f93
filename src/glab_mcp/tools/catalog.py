"""
Static catalog of the issue tools exposed over MCP.

Every tool is declared once here as an immutable ToolDefinition. The
catalog is consulted by the MCP discovery operation (tools/list), by the
argument validator, and indirectly by the argument translator.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

ParameterKind = Literal["text", "integer", "boolean"]

# JSON Schema type for each parameter kind
_SCHEMA_TYPES = {
    "text": "string",
    "integer": "integer",
    "boolean": "boolean",
}


class ToolNotFound(KeyError):
    """Raised when a tool name is not in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


class InvalidArguments(ValueError):
    """Raised when call arguments violate a tool's declared schema."""

    def __init__(self, tool_name: str, problems: List[str]):
        self.tool_name = tool_name
        self.problems = problems
        super().__init__(
            f"Invalid arguments for {tool_name}: " + "; ".join(problems)
        )


@dataclass(frozen=True)
class ParameterSpec:
    """
    One named input of a tool.

    Attributes:
        key: Parameter name, unique within its tool
        kind: Value kind ("text", "integer" or "boolean")
        description: Human-readable description shown to MCP clients
        required: Whether the call is rejected when the parameter is absent
        allowed_values: Closed set of accepted values (text parameters only)
    """

    key: str
    kind: ParameterKind
    description: str
    required: bool = False
    allowed_values: Optional[Tuple[str, ...]] = None

    def to_schema(self) -> Dict[str, Any]:
        """Render as a JSON Schema property."""
        schema: Dict[str, Any] = {"type": _SCHEMA_TYPES[self.kind]}
        if self.allowed_values:
            schema["enum"] = list(self.allowed_values)
        schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class ToolDefinition:
    """Declarative description of one MCP tool."""

    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...] = ()

    @property
    def required(self) -> List[str]:
        return [p.key for p in self.parameters if p.required]

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema object describing the tool's input."""
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {p.key: p.to_schema() for p in self.parameters},
        }
        if self.required:
            schema["required"] = self.required
        return schema

    def get_parameter(self, key: str) -> Optional[ParameterSpec]:
        for param in self.parameters:
            if param.key == key:
                return param
        return None


def _repo(description: str = "Repository in OWNER/REPO format (optional)") -> ParameterSpec:
    return ParameterSpec("repo", "text", description)


_ISSUE_ID = ParameterSpec("issue_id", "integer", "The issue ID/number", required=True)


TOOLS: Tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="issue_list",
        description=(
            "List project issues. Use --all for all issues, or filter by "
            "state, labels, assignee, etc."
        ),
        parameters=(
            _repo(
                "Repository in OWNER/REPO format (optional, uses current "
                "repo if not specified)"
            ),
            ParameterSpec(
                "state",
                "text",
                "Filter by issue state",
                allowed_values=("opened", "closed", "all"),
            ),
            ParameterSpec("labels", "text", "Comma-separated list of labels to filter by"),
            ParameterSpec("assignee", "text", "Filter by assignee username"),
            ParameterSpec("author", "text", "Filter by author username"),
            ParameterSpec("search", "text", "Search issues by title and description"),
            ParameterSpec("per_page", "integer", "Number of issues per page (default 30)"),
            ParameterSpec("page", "integer", "Page number"),
        ),
    ),
    ToolDefinition(
        name="issue_view",
        description="View details of a specific issue by ID",
        parameters=(
            _ISSUE_ID,
            _repo(),
            ParameterSpec("comments", "boolean", "Include comments in the output"),
        ),
    ),
    ToolDefinition(
        name="issue_create",
        description="Create a new issue",
        parameters=(
            ParameterSpec("title", "text", "Issue title", required=True),
            ParameterSpec("description", "text", "Issue description/body"),
            ParameterSpec("labels", "text", "Comma-separated list of labels"),
            ParameterSpec("assignees", "text", "Comma-separated list of assignee usernames"),
            ParameterSpec("milestone", "text", "Milestone title or ID"),
            ParameterSpec("confidential", "boolean", "Make the issue confidential"),
            _repo(),
        ),
    ),
    ToolDefinition(
        name="issue_update",
        description="Update an existing issue",
        parameters=(
            _ISSUE_ID,
            ParameterSpec("title", "text", "New issue title"),
            ParameterSpec("description", "text", "New issue description/body"),
            ParameterSpec("labels", "text", "Comma-separated list of labels to set"),
            ParameterSpec("unlabel", "text", "Comma-separated list of labels to remove"),
            ParameterSpec("assignees", "text", "Comma-separated list of assignee usernames"),
            ParameterSpec("unassign", "boolean", "Remove all assignees"),
            ParameterSpec("milestone", "text", "Milestone title or ID"),
            ParameterSpec("confidential", "boolean", "Make the issue confidential"),
            _repo(),
        ),
    ),
    ToolDefinition(
        name="issue_close",
        description="Close an issue",
        parameters=(_ISSUE_ID, _repo()),
    ),
    ToolDefinition(
        name="issue_reopen",
        description="Reopen a closed issue",
        parameters=(_ISSUE_ID, _repo()),
    ),
    ToolDefinition(
        name="issue_note",
        description="Add a comment/note to an issue",
        parameters=(
            _ISSUE_ID,
            ParameterSpec("message", "text", "The comment text", required=True),
            _repo(),
        ),
    ),
)

_TOOLS_BY_NAME: Dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}


def list_tools() -> List[ToolDefinition]:
    """Return every tool definition in catalog order."""
    return list(TOOLS)


def lookup(name: str) -> ToolDefinition:
    """
    Find a tool definition by exact name.

    Raises:
        ToolNotFound: If no tool has this name
    """
    try:
        return _TOOLS_BY_NAME[name]
    except KeyError:
        raise ToolNotFound(name) from None


def _kind_problem(param: ParameterSpec, value: Any) -> Optional[str]:
    if param.kind == "boolean":
        if not isinstance(value, bool):
            return f"'{param.key}' must be a boolean"
    elif param.kind == "integer":
        # bool is an int subclass
        if isinstance(value, bool):
            return f"'{param.key}' must be an integer"
        if isinstance(value, float) and value.is_integer():
            return None
        if not isinstance(value, int):
            return f"'{param.key}' must be an integer"
    else:
        if not isinstance(value, str):
            return f"'{param.key}' must be a string"
        if param.allowed_values and value not in param.allowed_values:
            allowed = ", ".join(param.allowed_values)
            return f"'{param.key}' must be one of: {allowed}"
    return None


def validate_arguments(definition: ToolDefinition, arguments: Optional[Mapping[str, Any]]) -> None:
    """
    Check call arguments against a tool's declared parameters.

    Undeclared keys are ignored and None counts as absent.

    Raises:
        InvalidArguments: Listing every problem found
    """
    arguments = arguments or {}
    problems: List[str] = []

    for param in definition.parameters:
        value = arguments.get(param.key)
        if value is None:
            if param.required:
                problems.append(f"missing required parameter '{param.key}'")
            continue

        problem = _kind_problem(param, value)
        if problem:
            problems.append(problem)

    if problems:
        raise InvalidArguments(definition.name, problems)

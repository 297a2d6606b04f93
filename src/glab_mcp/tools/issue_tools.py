"""MCP issue tools: translation of tool calls into glab argument vectors.

Each tool in the catalog has one operation record here. A record is built
from the call arguments (undeclared keys are dropped) and renders the
``glab issue <verb> ...`` argument vector for that operation.

Note that ``assignee`` (issue_list filter) and ``assignees`` (create/update
value) both render as ``--assignee``; that is glab's own flag name for both.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

# Appended to issue create so glab never prompts for confirmation
SKIP_CONFIRMATION_FLAG = "--yes"

T = TypeVar("T", bound="IssueOperation")


class UnknownTool(Exception):
    """Raised when a tool name has no argument translation."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


def _int_text(value: Any) -> str:
    """Render an integer parameter as plain base-10 text."""
    return str(int(value))


def _add_flag(args: List[str], flag: str, value: Any) -> None:
    """Append ``flag value`` unless value is absent or empty."""
    if value is None or value == "":
        return
    args.extend([flag, str(value)])


def _add_count(args: List[str], flag: str, value: Any) -> None:
    """Append ``flag N`` for a nonzero integer; 0 counts as unset."""
    if not value:
        return
    args.extend([flag, _int_text(value)])


def _add_switch(args: List[str], flag: str, enabled: Optional[bool]) -> None:
    """Append a bare boolean flag when enabled."""
    if enabled:
        args.append(flag)


@dataclass(frozen=True)
class IssueOperation(ABC):
    """Base class for glab issue operations.

    Subclasses set tool_name and verb and implement to_args.
    """

    tool_name = ""
    verb = ""

    @classmethod
    def from_arguments(cls: Type[T], arguments: Optional[Mapping[str, Any]]) -> T:
        arguments = arguments or {}
        declared = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in arguments.items() if k in declared})

    @abstractmethod
    def to_args(self) -> List[str]:
        """Render the glab argument vector for this operation."""


@dataclass(frozen=True)
class IssueList(IssueOperation):
    tool_name = "issue_list"
    verb = "list"

    repo: Optional[str] = None
    state: Optional[str] = None
    labels: Optional[str] = None
    assignee: Optional[str] = None
    author: Optional[str] = None
    search: Optional[str] = None
    per_page: Optional[int] = None
    page: Optional[int] = None

    def to_args(self) -> List[str]:
        args = ["issue", self.verb]
        _add_flag(args, "-R", self.repo)
        _add_flag(args, "--state", self.state)
        _add_flag(args, "--label", self.labels)
        _add_flag(args, "--assignee", self.assignee)
        _add_flag(args, "--author", self.author)
        _add_flag(args, "--search", self.search)
        _add_count(args, "--per-page", self.per_page)
        _add_count(args, "--page", self.page)
        return args


@dataclass(frozen=True)
class IssueView(IssueOperation):
    tool_name = "issue_view"
    verb = "view"

    issue_id: int
    repo: Optional[str] = None
    comments: Optional[bool] = None

    def to_args(self) -> List[str]:
        args = ["issue", self.verb, _int_text(self.issue_id)]
        _add_flag(args, "-R", self.repo)
        _add_switch(args, "--comments", self.comments)
        return args


@dataclass(frozen=True)
class IssueCreate(IssueOperation):
    tool_name = "issue_create"
    verb = "create"

    title: str
    description: Optional[str] = None
    labels: Optional[str] = None
    assignees: Optional[str] = None
    milestone: Optional[str] = None
    confidential: Optional[bool] = None
    repo: Optional[str] = None

    def to_args(self) -> List[str]:
        args = ["issue", self.verb, "--title", self.title]
        _add_flag(args, "--description", self.description)
        _add_flag(args, "--label", self.labels)
        _add_flag(args, "--assignee", self.assignees)
        _add_flag(args, "--milestone", self.milestone)
        _add_switch(args, "--confidential", self.confidential)
        _add_flag(args, "-R", self.repo)
        args.append(SKIP_CONFIRMATION_FLAG)
        return args


@dataclass(frozen=True)
class IssueUpdate(IssueOperation):
    tool_name = "issue_update"
    verb = "update"

    issue_id: int
    title: Optional[str] = None
    description: Optional[str] = None
    labels: Optional[str] = None
    unlabel: Optional[str] = None
    assignees: Optional[str] = None
    unassign: Optional[bool] = None
    milestone: Optional[str] = None
    confidential: Optional[bool] = None
    repo: Optional[str] = None

    def to_args(self) -> List[str]:
        args = ["issue", self.verb, _int_text(self.issue_id)]
        _add_flag(args, "--title", self.title)
        _add_flag(args, "--description", self.description)
        _add_flag(args, "--label", self.labels)
        _add_flag(args, "--unlabel", self.unlabel)
        _add_flag(args, "--assignee", self.assignees)
        _add_switch(args, "--unassign", self.unassign)
        _add_flag(args, "--milestone", self.milestone)
        _add_switch(args, "--confidential", self.confidential)
        _add_flag(args, "-R", self.repo)
        return args


@dataclass(frozen=True)
class IssueClose(IssueOperation):
    tool_name = "issue_close"
    verb = "close"

    issue_id: int
    repo: Optional[str] = None

    def to_args(self) -> List[str]:
        args = ["issue", self.verb, _int_text(self.issue_id)]
        _add_flag(args, "-R", self.repo)
        return args


@dataclass(frozen=True)
class IssueReopen(IssueClose):
    tool_name = "issue_reopen"
    verb = "reopen"


@dataclass(frozen=True)
class IssueNote(IssueOperation):
    tool_name = "issue_note"
    verb = "note"

    issue_id: int
    message: str
    repo: Optional[str] = None

    def to_args(self) -> List[str]:
        args = ["issue", self.verb, _int_text(self.issue_id), "--message", self.message]
        _add_flag(args, "-R", self.repo)
        return args


OPERATIONS: Dict[str, Type[IssueOperation]] = {
    op.tool_name: op
    for op in (
        IssueList,
        IssueView,
        IssueCreate,
        IssueUpdate,
        IssueClose,
        IssueReopen,
        IssueNote,
    )
}


def build_operation(tool_name: str, arguments: Optional[Mapping[str, Any]]) -> IssueOperation:
    """
    Build the typed operation record for a tool call.

    Raises:
        UnknownTool: If tool_name has no operation
    """
    operation = OPERATIONS.get(tool_name)
    if operation is None:
        raise UnknownTool(tool_name)
    return operation.from_arguments(arguments)


def build_args(tool_name: str, arguments: Optional[Mapping[str, Any]]) -> List[str]:
    """
    Translate a tool call into the glab argument vector (program name excluded).

    Args:
        tool_name: Catalog tool name (e.g., "issue_view")
        arguments: Call arguments, already validated against the catalog

    Returns:
        Ordered argument tokens, e.g. ["issue", "view", "42", "-R", "a/b"]

    Raises:
        UnknownTool: If tool_name is not a known issue tool
    """
    args = build_operation(tool_name, arguments).to_args()
    logger.debug("Translated %s into %s", tool_name, args)
    return args

"""Command taxonomy, result types and version constants for cmdcenter.

This module defines the action vocabulary emitted by the command rules and
the value types that flow between rules, the registry and the parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

# Bump on breaking changes to the ParsedAction shape or the action taxonomy
SCHEMA_VERSION = 1

# Bump on any behavior change to detection or extraction
PARSER_VERSION = "1.0.0"


class ActionType(str, Enum):
    """Action types a rule may propose to the executor."""

    PROJECT_CREATE = "project.create"
    PROJECT_SET_DEFAULTS = "project.set_defaults"

    TAKEOFF_ADD_ITEM = "takeoff.add_item"
    TAKEOFF_GENERATE_DRAFTS = "takeoff.generate_drafts_from_assemblies"
    TAKEOFF_PROMOTE_DRAFTS = "takeoff.promote_drafts"
    TAKEOFF_DELETE_DRAFTS = "takeoff.delete_drafts"

    LABOR_ADD_TASK_LINE = "labor.add_task_line"

    EXPORT_PDF = "export.pdf"
    EXPORT_CSV = "export.csv"

    QA_SHOW_ISSUES = "qa.show_issues"
    PLANS_OPEN = "plans.open"

    SYSTEM_CAPABILITIES = "system.capabilities"


class ActionConfidence:
    """Reference confidence levels used by the rule authors.

    Confidence values are fixed per rule, not computed from match quality:
    - LITERAL (1.0): Fixed phrase, nothing extracted
    - HIGH (0.95): Keyword command with trivial parameters
    - STRONG (0.9): Free-text name or noun mapping
    - MEDIUM (0.85): Description/quantity/unit extraction
    - LOOSE (0.8): Multi-value extraction from a whole utterance
    """

    LITERAL = 1.0
    HIGH = 0.95
    STRONG = 0.9
    MEDIUM = 0.85
    LOOSE = 0.8


@dataclass(frozen=True)
class CommandContext:
    """What the caller currently has open.

    Attributes:
        project_id: Identifier of the open project, if any
        project_type: Type of the open project (e.g. "basement_finish")
    """

    project_id: str | None = None
    project_type: str | None = None


@dataclass
class ParsedAction:
    """A typed instruction proposed for later execution.

    Attributes:
        type: Dotted action type (see ActionType)
        params: Action payload, shape fixed per action type
        confidence: How literal the extraction was, 0.0-1.0
    """

    type: str
    params: dict[str, Any] = field(default_factory=dict)
    confidence: float = ActionConfidence.HIGH

    def __post_init__(self) -> None:
        if isinstance(self.type, ActionType):
            self.type = self.type.value
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "type": self.type,
            "params": dict(self.params),
            "confidence": self.confidence,
        }


@dataclass
class RuleResult:
    """Outcome of a single rule's parse.

    Attributes:
        matched: The rule recognized the shape of the utterance
        actions: Proposed actions (may be empty even when matched)
        missing_info: Clarifying question when a required value is absent
        follow_up: Reserved for conversational continuation
        partial: Only one clause was recognized; other clauses remain
    """

    matched: bool
    actions: list[ParsedAction] = field(default_factory=list)
    missing_info: str | None = None
    follow_up: str | None = None
    partial: bool = False

    @classmethod
    def no_match(cls) -> "RuleResult":
        """Shape not recognized; let lower-priority rules try."""
        return cls(matched=False)

    @classmethod
    def ask(cls, question: str) -> "RuleResult":
        """Shape recognized but a precondition or value is missing."""
        return cls(matched=True, missing_info=question)


@dataclass(frozen=True)
class CommandRule:
    """A named detection predicate plus parse function for one command shape.

    Attributes:
        id: Unique rule identifier
        name: Human-readable name
        priority: Higher is checked first; ties keep registration order
        examples: Sample commands for help text
        required_context: Context fields the rule needs (documentation only)
        detect: Cheap shape check
        parse: Extraction into a RuleResult
    """

    id: str
    name: str
    priority: int
    examples: tuple[str, ...]
    required_context: tuple[str, ...]
    detect: Callable[[str, CommandContext], bool] = field(repr=False, compare=False)
    parse: Callable[[str, CommandContext], RuleResult] = field(repr=False, compare=False)


@dataclass(frozen=True)
class Suggestion:
    """An example command offered when nothing matched."""

    label: str
    command: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "command": self.command}


@dataclass
class ParseResult:
    """Engine output for one command.

    Attributes:
        success: At least one action was produced
        actions: Proposed actions in rule priority order
        missing_info: Clarifying question (recoverable by the caller)
        error: Human-readable failure message
        suggestions: Example commands offered with an error
        schema_version: Action vocabulary version
        parser_version: Detection/extraction behavior version
    """

    success: bool
    actions: list[ParsedAction] = field(default_factory=list)
    missing_info: str | None = None
    error: str | None = None
    suggestions: list[Suggestion] | None = None
    schema_version: int = SCHEMA_VERSION
    parser_version: str = PARSER_VERSION

    @classmethod
    def empty(cls) -> "ParseResult":
        """Result for blank input."""
        return cls(success=False, error="Empty command")

    @property
    def needs_clarification(self) -> bool:
        """Check if the caller should ask the user a follow-up question."""
        return self.missing_info is not None

    def action_types(self) -> list[str]:
        """Types of the proposed actions, in order."""
        return [action.type for action in self.actions]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding unset optional members."""
        data: dict[str, Any] = {
            "success": self.success,
            "actions": [action.to_dict() for action in self.actions],
            "schema_version": self.schema_version,
            "parser_version": self.parser_version,
        }
        if self.missing_info is not None:
            data["missing_info"] = self.missing_info
        if self.error is not None:
            data["error"] = self.error
        if self.suggestions is not None:
            data["suggestions"] = [s.to_dict() for s in self.suggestions]
        return data


# Context fields a rule may list in required_context
PROJECT_REQUIRED: tuple[str, ...] = ("project_id",)

# Standard clarification when a gated rule runs without an open project
OPEN_PROJECT_FIRST = "Please open a project first."

"""Deterministic command parsing for cmdcenter.

This module turns short imperative sentences into typed, confidence-scored
actions for a construction-estimating project:

    "Add drywall 1050 sf at $12.99"          -> takeoff.add_item
    "Set tax 7 markup 20 burden 35"          -> project.set_defaults
    "Generate drafts using framing + drywall" -> takeoff.generate_drafts_from_assemblies

Example usage:
    ```python
    from cmdcenter.core.commands import CommandContext, parse_command

    result = parse_command("Add drywall 1050 sf at $12.99", CommandContext(project_id="p1"))
    assert result.success
    assert result.actions[0].params["unit"] == "SF"

    result = parse_command("Export PDF")
    if result.needs_clarification:
        print(result.missing_info)
    ```
"""

from .normalize import (
    capitalize_words,
    extract_assembly_names,
    extract_variables,
    infer_category,
    infer_project_type,
    infer_trade,
    normalize_unit,
    parse_number,
    parse_price,
)
from .parser import (
    MAX_INPUT_LENGTH,
    CommandParser,
    create_parser,
    get_capabilities,
    parse_command,
)
from .preview import format_action_preview
from .registry import (
    RuleRegistry,
    build_registry,
    default_registry,
)
from .rules import RULE_FAMILIES
from .suggestions import suggest_commands
from .taxonomy import (
    PARSER_VERSION,
    SCHEMA_VERSION,
    ActionConfidence,
    ActionType,
    CommandContext,
    CommandRule,
    ParsedAction,
    ParseResult,
    RuleResult,
    Suggestion,
)

__all__ = [
    # Main parser
    "CommandParser",
    "create_parser",
    "parse_command",
    "get_capabilities",
    "MAX_INPUT_LENGTH",
    # Registry
    "RuleRegistry",
    "build_registry",
    "default_registry",
    "RULE_FAMILIES",
    # Taxonomy
    "ActionType",
    "ActionConfidence",
    "CommandContext",
    "CommandRule",
    "ParsedAction",
    "ParseResult",
    "RuleResult",
    "Suggestion",
    "SCHEMA_VERSION",
    "PARSER_VERSION",
    # Helpers
    "normalize_unit",
    "parse_number",
    "parse_price",
    "capitalize_words",
    "infer_category",
    "infer_trade",
    "infer_project_type",
    "extract_assembly_names",
    "extract_variables",
    "suggest_commands",
    "format_action_preview",
]

"""Takeoff item and draft rules."""

from __future__ import annotations

import re

from ..normalize import (
    as_number,
    capitalize_words,
    extract_assembly_names,
    extract_variables,
    infer_category,
    infer_project_type,
    normalize_unit,
    parse_price,
)
from ..taxonomy import (
    OPEN_PROJECT_FIRST,
    PROJECT_REQUIRED,
    ActionConfidence,
    ActionType,
    CommandContext,
    CommandRule,
    ParsedAction,
    RuleResult,
)

ASK_ASSEMBLIES = "Which assemblies? (e.g., framing, drywall, electrical)"
ASK_ITEM = "Which item would you like to delete? Please provide the item ID or description."

_GENERATE_DETECT = re.compile(r"generate\s+(?:drafts?|takeoff|items?)", re.IGNORECASE)
_GENERATE_PATTERNS = (
    re.compile(r"generate\s+(?:drafts?|takeoff|items?)\s+(?:using|from|for)\s+(.+)", re.IGNORECASE),
    # "Basement: generate drafts from framing, drywall"
    re.compile(r"(.+?):\s*generate\s+drafts?\s+(?:using|from)\s+(.+)", re.IGNORECASE),
)

_PROMOTE_DETECT = re.compile(r"promote\s+(?:all\s+)?drafts?", re.IGNORECASE)
_DELETE_DRAFTS_DETECT = re.compile(r"delete\s+(?:all\s+)?drafts?", re.IGNORECASE)
_DELETE_ITEM_DETECT = re.compile(r"delete\s+(?:takeoff\s+)?item", re.IGNORECASE)

_ADD_DETECT = re.compile(
    r"add\s+.+\s+\d+(?:\.\d+)?\s*(?:sf|sq\s*ft|lf|linear|ea|each|sheets?|pcs?|cy|sy|bd\s*ft)"
)
_ADD_ITEM = re.compile(
    r"add\s+(.+?)\s+(\d+(?:\.\d+)?)\s*"
    r"(each|ea|sf|sq\s*ft|lf|linear\s*(?:feet|ft)|sheets?|pcs?|cy|sy|bd\s*ft)?"
    r"(?:\s+(?:at|@)\s*(\$?\d+(?:\.\d+)?))?",
    re.IGNORECASE,
)


def _scope(command: str) -> str:
    return "all" if "all" in command.lower() else "selected"


def _detect_generate(command: str, context: CommandContext) -> bool:
    return bool(_GENERATE_DETECT.search(command))


def _parse_generate(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)

    match = _GENERATE_PATTERNS[0].search(command) or _GENERATE_PATTERNS[1].search(command)
    if not match:
        return RuleResult.ask(ASK_ASSEMBLIES)

    # Assemblies come from the trailing clause, variables from the whole command
    assemblies = extract_assembly_names(match.group(match.lastindex))
    if not assemblies:
        return RuleResult.ask(ASK_ASSEMBLIES)

    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.TAKEOFF_GENERATE_DRAFTS,
                params={
                    "assemblies": assemblies,
                    "variables": extract_variables(command),
                    "project_type": context.project_type or infer_project_type(command),
                    "draft": True,
                },
                confidence=ActionConfidence.LOOSE,
            )
        ],
    )


def _detect_promote(command: str, context: CommandContext) -> bool:
    return bool(_PROMOTE_DETECT.search(command))


def _parse_promote(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)
    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.TAKEOFF_PROMOTE_DRAFTS,
                params={"scope": _scope(command)},
                confidence=ActionConfidence.HIGH,
            )
        ],
    )


def _detect_delete_drafts(command: str, context: CommandContext) -> bool:
    return bool(_DELETE_DRAFTS_DETECT.search(command))


def _parse_delete_drafts(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)
    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.TAKEOFF_DELETE_DRAFTS,
                params={"scope": _scope(command)},
                confidence=ActionConfidence.HIGH,
            )
        ],
    )


def _detect_add_item(command: str, context: CommandContext) -> bool:
    lower = command.lower()
    # Task and labor lines belong to the labor rules
    if "task" in lower or "labor" in lower:
        return False
    return bool(_ADD_DETECT.search(lower))


def _parse_add_item(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)

    match = _ADD_ITEM.search(command)
    if not match:
        return RuleResult.no_match()

    description = capitalize_words(match.group(1).strip())
    unit = normalize_unit(match.group(3)) if match.group(3) else "EA"
    unit_cost = parse_price(match.group(4)) if match.group(4) else None

    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.TAKEOFF_ADD_ITEM,
                params={
                    "description": description,
                    "quantity": as_number(match.group(2)),
                    "unit": unit,
                    "unit_cost": unit_cost,
                    "category": infer_category(description),
                    "draft": "draft" in command.lower(),
                },
                confidence=ActionConfidence.MEDIUM,
            )
        ],
    )


def _detect_delete_item(command: str, context: CommandContext) -> bool:
    return bool(_DELETE_ITEM_DETECT.search(command))


def _parse_delete_item(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)
    return RuleResult.ask(ASK_ITEM)


generate_drafts_rule = CommandRule(
    id="takeoff.generate_drafts",
    name="Generate Draft Items",
    priority=85,
    examples=(
        "Generate drafts using framing + drywall. 90 LF walls, 8 ft ceilings",
        "Basement: generate drafts from framing, drywall, electrical",
    ),
    required_context=PROJECT_REQUIRED,
    detect=_detect_generate,
    parse=_parse_generate,
)

promote_drafts_rule = CommandRule(
    id="takeoff.promote_drafts",
    name="Promote Drafts",
    priority=90,
    examples=("Promote all drafts", "Promote drafts"),
    required_context=PROJECT_REQUIRED,
    detect=_detect_promote,
    parse=_parse_promote,
)

delete_drafts_rule = CommandRule(
    id="takeoff.delete_drafts",
    name="Delete Drafts",
    priority=90,
    examples=("Delete all drafts", "Delete drafts"),
    required_context=PROJECT_REQUIRED,
    detect=_detect_delete_drafts,
    parse=_parse_delete_drafts,
)

add_item_rule = CommandRule(
    id="takeoff.add_item",
    name="Add Takeoff Item",
    priority=80,
    examples=(
        "Add drywall 1050 sf at $12.99",
        "Add 2x4 studs 100 ea at $3.50",
    ),
    required_context=PROJECT_REQUIRED,
    detect=_detect_add_item,
    parse=_parse_add_item,
)

delete_item_rule = CommandRule(
    id="takeoff.delete_item",
    name="Delete Takeoff Item",
    priority=75,
    examples=("Delete takeoff item", "Delete item"),
    required_context=PROJECT_REQUIRED,
    detect=_detect_delete_item,
    parse=_parse_delete_item,
)

TAKEOFF_RULES: tuple[CommandRule, ...] = (
    generate_drafts_rule,
    promote_drafts_rule,
    delete_drafts_rule,
    add_item_rule,
    delete_item_rule,
)

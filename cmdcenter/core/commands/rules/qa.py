"""QA, help and plan utility rules."""

from __future__ import annotations

import re

from ..taxonomy import (
    OPEN_PROJECT_FIRST,
    PARSER_VERSION,
    PROJECT_REQUIRED,
    ActionConfidence,
    ActionType,
    CommandContext,
    CommandRule,
    ParsedAction,
    RuleResult,
)

ASK_PLAN = "Which plan file would you like to open?"

_ISSUES_DETECT = re.compile(
    r"(?:show|list|check)\s*(?:qa|quality|issues?|problems?)", re.IGNORECASE
)
_CAPABILITY_PATTERNS = (
    re.compile(r"what\s+can\s+you\s+do", re.IGNORECASE),
    re.compile(r"^help$", re.IGNORECASE),
    re.compile(r"show\s+(?:commands|capabilities|help)", re.IGNORECASE),
)
_PLAN_DETECT = re.compile(r"open\s+(?:plan|blueprint|drawing)", re.IGNORECASE)
_PLAN_NAME = re.compile(
    r"open\s+(?:plans?|blueprints?|drawings?)\b\s*(?:sheet\s+)?(.*)$", re.IGNORECASE
)


def _detect_issues(command: str, context: CommandContext) -> bool:
    return bool(_ISSUES_DETECT.search(command))


def _parse_issues(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)
    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.QA_SHOW_ISSUES,
                params={},
                confidence=ActionConfidence.HIGH,
            )
        ],
    )


def _detect_capabilities(command: str, context: CommandContext) -> bool:
    text = command.strip()
    return any(pattern.search(text) for pattern in _CAPABILITY_PATTERNS)


def _parse_capabilities(command: str, context: CommandContext) -> RuleResult:
    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.SYSTEM_CAPABILITIES,
                params={"version": PARSER_VERSION},
                confidence=ActionConfidence.LITERAL,
            )
        ],
    )


def _detect_plan(command: str, context: CommandContext) -> bool:
    return bool(_PLAN_DETECT.search(command))


def _parse_plan(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)

    match = _PLAN_NAME.search(command)
    name = match.group(1).strip(" .") if match else ""
    if not name:
        return RuleResult.ask(ASK_PLAN)

    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.PLANS_OPEN,
                params={"name": name},
                confidence=ActionConfidence.LOOSE,
            )
        ],
    )


show_issues_rule = CommandRule(
    id="qa.show_issues",
    name="Show QA Issues",
    priority=95,
    examples=("Show QA issues", "List issues", "Check quality"),
    required_context=PROJECT_REQUIRED,
    detect=_detect_issues,
    parse=_parse_issues,
)

# Highest priority in the registry: help always wins
capabilities_rule = CommandRule(
    id="system.capabilities",
    name="Show Capabilities",
    priority=110,
    examples=("What can you do?", "Help", "Show commands"),
    required_context=(),
    detect=_detect_capabilities,
    parse=_parse_capabilities,
)

open_plan_rule = CommandRule(
    id="plans.open",
    name="Open Plan",
    priority=70,
    examples=("Open plan A-101", "Open drawing sheet S2"),
    required_context=PROJECT_REQUIRED,
    detect=_detect_plan,
    parse=_parse_plan,
)

QA_RULES: tuple[CommandRule, ...] = (show_issues_rule, capabilities_rule, open_plan_rule)

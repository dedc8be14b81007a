"""Labor rules."""

from __future__ import annotations

import re

from ..normalize import as_number, capitalize_words, infer_trade, normalize_unit, parse_price
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

ASK_TASK = (
    "Please specify: task name, quantity, unit, and optionally rate. "
    'E.g., "Add task framing 100 hr at $45"'
)

_TASK_DETECT = re.compile(r"add\s+(?:labor\s+)?task", re.IGNORECASE)
_TASK_LINE = re.compile(
    r"add\s+(?:labor\s+)?task\s+(.+?)\s+(\d+(?:\.\d+)?)\s*(each|ea|sf|lf|hours?|hr)"
    r"(?:\s+(?:at|@)\s*(\$?\d+(?:\.\d+)?))?",
    re.IGNORECASE,
)


def _detect_task(command: str, context: CommandContext) -> bool:
    return bool(_TASK_DETECT.search(command))


def _parse_task(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)

    match = _TASK_LINE.search(command)
    if not match:
        return RuleResult.ask(ASK_TASK)

    task_name = capitalize_words(match.group(1).strip())
    base_rate = parse_price(match.group(4)) if match.group(4) else None

    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.LABOR_ADD_TASK_LINE,
                params={
                    "task_name": task_name,
                    "quantity": as_number(match.group(2)),
                    "unit": normalize_unit(match.group(3)),
                    "base_rate": base_rate,
                    "trade": infer_trade(task_name),
                },
                confidence=ActionConfidence.MEDIUM,
            )
        ],
    )


add_task_rule = CommandRule(
    id="labor.add_task_line",
    name="Add Labor Task",
    priority=80,
    examples=(
        "Add labor task framing 100 hr at $45",
        "Add task drywall hanging 1050 sf at $1.25",
    ),
    required_context=PROJECT_REQUIRED,
    detect=_detect_task,
    parse=_parse_task,
)

LABOR_RULES: tuple[CommandRule, ...] = (add_task_rule,)

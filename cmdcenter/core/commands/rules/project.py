"""Project lifecycle and project-default rules."""

from __future__ import annotations

import re

from ..normalize import capitalize_words, parse_number
from ..taxonomy import (
    PROJECT_REQUIRED,
    ActionConfidence,
    ActionType,
    CommandContext,
    CommandRule,
    ParsedAction,
    RuleResult,
)

_CREATE_DETECT = re.compile(r"create\s+project", re.IGNORECASE)
_CREATE_NAME = re.compile(r"create\s+project\s+(.+?)(?:\.\s*|$)", re.IGNORECASE)

# The project name stops at the first defaults keyword
_NAME_STOP = re.compile(r"\s*\b(?:tax|markup|burden|address)\b", re.IGNORECASE)

_VALUE = r"\s*(?:rate|percent|%)?\s*[:=]?\s*(\d+(?:\.\d+)?|\w+(?:[\s-]\w+)?)"

_DEFAULTS_DETECT = re.compile(
    r"(?:tax|markup|burden|waste)\s*(?:rate|percent|%)?\s*[:=]?\s*(\d+|\w+)",
    re.IGNORECASE,
)

# (param key, pattern) - each default is read independently
DEFAULT_FIELDS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("tax_percent", re.compile(r"tax" + _VALUE)),
    ("markup_percent", re.compile(r"markup" + _VALUE)),
    ("labor_burden_percent", re.compile(r"(?:labor\s*)?burden" + _VALUE)),
    ("waste_percent", re.compile(r"(?:default\s*)?waste" + _VALUE)),
)


def _detect_create(command: str, context: CommandContext) -> bool:
    return bool(_CREATE_DETECT.search(command))


def _parse_create(command: str, context: CommandContext) -> RuleResult:
    match = _CREATE_NAME.search(command)
    if not match:
        return RuleResult.no_match()

    pieces = _NAME_STOP.split(match.group(1), maxsplit=1)
    name = pieces[0].strip()
    if not name:
        return RuleResult.ask("What should the new project be called?")

    # Anything after the name (defaults, another sentence) is for other rules
    remainder = len(pieces) > 1 or bool(command[match.end() :].strip())

    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.PROJECT_CREATE,
                params={"name": capitalize_words(name)},
                confidence=ActionConfidence.STRONG,
            )
        ],
        partial=remainder,
    )


def _read_value(raw: str) -> int | float | None:
    """Read a captured value, retrying with its first word.

    "thirty five" -> 35, "seven markup" -> 7.
    """
    value = parse_number(raw)
    if value is None:
        first = re.split(r"[\s-]+", raw.strip(), maxsplit=1)[0]
        if first != raw:
            value = parse_number(first)
    return value


def _detect_defaults(command: str, context: CommandContext) -> bool:
    return bool(_DEFAULTS_DETECT.search(command.lower()))


def _parse_defaults(command: str, context: CommandContext) -> RuleResult:
    # A project created in the same utterance is the target of its defaults
    if not context.project_id and not _CREATE_DETECT.search(command):
        return RuleResult.ask("Please open a project first to set defaults.")

    lower = command.lower()
    params: dict[str, int | float] = {}
    for key, pattern in DEFAULT_FIELDS:
        match = pattern.search(lower)
        if match:
            value = _read_value(match.group(1))
            if value is not None:
                params[key] = value

    if not params:
        return RuleResult.no_match()

    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.PROJECT_SET_DEFAULTS,
                params=params,
                confidence=ActionConfidence.HIGH,
            )
        ],
    )


create_project_rule = CommandRule(
    id="project.create",
    name="Create Project",
    priority=100,
    examples=(
        "Create project Smithfield Addition",
        "Create project Kitchen Remodel. Tax 7 markup 20 burden 35",
    ),
    required_context=(),
    detect=_detect_create,
    parse=_parse_create,
)

set_defaults_rule = CommandRule(
    id="project.set_defaults",
    name="Set Project Defaults",
    priority=90,
    examples=(
        "Set tax 7 markup 20 burden 35",
        "Set markup 15 percent",
        "Set waste 10%",
    ),
    required_context=PROJECT_REQUIRED,
    detect=_detect_defaults,
    parse=_parse_defaults,
)

PROJECT_RULES: tuple[CommandRule, ...] = (create_project_rule, set_defaults_rule)

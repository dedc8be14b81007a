"""Export rules."""

from __future__ import annotations

import re

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

# (keyword, dataset) - first hit wins, "takeoff" otherwise
CSV_DATASETS: tuple[tuple[str, str], ...] = (
    ("labor", "labor"),
    ("rfi", "rfis"),
    ("assumption", "assumptions"),
    ("checklist", "checklist"),
)
DEFAULT_CSV_DATASET = "takeoff"

_PDF_DETECT = re.compile(r"export\s+pdf", re.IGNORECASE)
_CSV_DETECT = re.compile(r"export\s+(?:.+\s+)?csv", re.IGNORECASE)
_CSV_WHICH = re.compile(r"export\s+(?:(.+?)\s+)?csv", re.IGNORECASE)


def _include_drafts(command: str) -> bool:
    return "draft" in command.lower()


def _detect_pdf(command: str, context: CommandContext) -> bool:
    return bool(_PDF_DETECT.search(command))


def _parse_pdf(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)
    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.EXPORT_PDF,
                params={"includeDrafts": _include_drafts(command)},
                confidence=ActionConfidence.HIGH,
            )
        ],
    )


def _detect_csv(command: str, context: CommandContext) -> bool:
    return bool(_CSV_DETECT.search(command))


def _parse_csv(command: str, context: CommandContext) -> RuleResult:
    if not context.project_id:
        return RuleResult.ask(OPEN_PROJECT_FIRST)

    match = _CSV_WHICH.search(command)
    if not match:
        return RuleResult.no_match()

    which = (match.group(1) or "").lower()
    dataset = next(
        (name for keyword, name in CSV_DATASETS if keyword in which),
        DEFAULT_CSV_DATASET,
    )

    return RuleResult(
        matched=True,
        actions=[
            ParsedAction(
                type=ActionType.EXPORT_CSV,
                params={"which": dataset, "includeDrafts": _include_drafts(command)},
                confidence=ActionConfidence.STRONG,
            )
        ],
    )


export_pdf_rule = CommandRule(
    id="export.pdf",
    name="Export PDF",
    priority=95,
    examples=("Export PDF", "Export PDF with drafts"),
    required_context=PROJECT_REQUIRED,
    detect=_detect_pdf,
    parse=_parse_pdf,
)

export_csv_rule = CommandRule(
    id="export.csv",
    name="Export CSV",
    priority=94,
    examples=(
        "Export takeoff CSV",
        "Export labor CSV",
        "Export RFIs CSV",
    ),
    required_context=PROJECT_REQUIRED,
    detect=_detect_csv,
    parse=_parse_csv,
)

EXPORT_RULES: tuple[CommandRule, ...] = (export_pdf_rule, export_csv_rule)

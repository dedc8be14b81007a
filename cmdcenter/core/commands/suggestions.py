"""Fallback suggestions for commands no rule understood.

A fixed, ordered battery of keyword patterns is run against the lowercased
input. Each hit contributes example commands; with no hits a default set is
used. Output is capped and fully deterministic.
"""

from __future__ import annotations

import re

from .taxonomy import Suggestion

MAX_SUGGESTIONS = 5

FALLBACK_MESSAGE = "I couldn't understand that command. Try one of these:"

# (pattern, suggestions) - evaluated in order, every hit contributes
SUGGESTION_PATTERNS: tuple[tuple[re.Pattern[str], tuple[Suggestion, ...]], ...] = (
    (
        re.compile(r"export|pdf|csv|download|save"),
        (
            Suggestion("Export estimate PDF", "Export PDF"),
            Suggestion("Export takeoff CSV", "Export takeoff CSV"),
            Suggestion("Export labor CSV", "Export labor CSV"),
        ),
    ),
    (
        re.compile(r"markup|tax|burden|percent|%"),
        (
            Suggestion("Set project defaults", "Set tax 7 markup 20 burden 35"),
            Suggestion("Set waste factor", "Set waste 10%"),
        ),
    ),
    (
        re.compile(r"draft|promote|finalize"),
        (
            Suggestion("Promote drafts", "Promote all drafts"),
            Suggestion("Delete drafts", "Delete all drafts"),
        ),
    ),
    (
        re.compile(
            r"drywall|sheetrock|stud|framing|insulation|paint|electrical|plumbing|"
            r"hvac|floor|tile|carpet|trim|door|window|lumber|material"
        ),
        (
            Suggestion("Add a takeoff item", "Add drywall 1050 sf at $12.99"),
            Suggestion("Add framing material", "Add 2x4 studs 100 ea at $3.50"),
        ),
    ),
    (
        re.compile(r"generate|assembly|assemblies"),
        (
            Suggestion(
                "Generate drafts from assemblies",
                "Generate drafts using framing + drywall. 90 LF walls, 8 ft ceilings",
            ),
        ),
    ),
    (
        re.compile(r"qa|issue|check|review"),
        (Suggestion("Show QA issues", "Show QA issues"),),
    ),
    (
        re.compile(r"plan|open|view|sheet"),
        (Suggestion("Open a plan sheet", "Open plan A-101"),),
    ),
    (
        re.compile(r"create|project|new"),
        (
            Suggestion("Create a project", "Create project Smithfield Addition"),
            Suggestion(
                "Create a project with defaults",
                "Create project Kitchen Remodel. Tax 7 markup 20 burden 35",
            ),
        ),
    ),
)

DEFAULT_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion("Create a project", "Create project Smithfield Addition"),
    Suggestion("Add a takeoff item", "Add drywall 1050 sf at $12.99"),
    Suggestion("Generate drafts from assemblies", "Generate drafts using framing + drywall"),
    Suggestion("Export estimate PDF", "Export PDF"),
    Suggestion("See everything I can do", "What can you do?"),
)


def suggest_commands(command: str) -> tuple[str, list[Suggestion]]:
    """Build a help message and example commands relevant to the input.

    Args:
        command: The command nothing could parse

    Returns:
        (message, suggestions) with between 1 and MAX_SUGGESTIONS suggestions
    """
    lower = command.lower()
    suggestions: list[Suggestion] = []

    for pattern, examples in SUGGESTION_PATTERNS:
        if pattern.search(lower):
            suggestions.extend(examples)

    if not suggestions:
        suggestions = list(DEFAULT_SUGGESTIONS)

    return FALLBACK_MESSAGE, suggestions[:MAX_SUGGESTIONS]


__all__ = [
    "FALLBACK_MESSAGE",
    "MAX_SUGGESTIONS",
    "DEFAULT_SUGGESTIONS",
    "suggest_commands",
]

"""Core components for cmdcenter."""

from __future__ import annotations

from .commands import (
    CommandContext,
    CommandParser,
    ParsedAction,
    ParseResult,
    get_capabilities,
    parse_command,
)

__all__ = [
    "CommandContext",
    "CommandParser",
    "ParsedAction",
    "ParseResult",
    "get_capabilities",
    "parse_command",
]

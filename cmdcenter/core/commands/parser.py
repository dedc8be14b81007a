"""Main command parsing orchestrator for cmdcenter.

This module implements the three-pass dispatch over the rule registry:
1. Single-winner pass - the first matching rule in priority order decides
2. Combined pass - actions from every matching rule, for multi-clause input
3. Fallback - keyword-driven suggestions when nothing matched

The parser is pure: no I/O, no state carried between calls.
"""

from __future__ import annotations

import logging
from typing import Any

from .registry import RuleRegistry, default_registry
from .suggestions import suggest_commands
from .taxonomy import CommandContext, ParsedAction, ParseResult

logger = logging.getLogger(__name__)

# Security: Maximum input length to prevent DoS via regex abuse
MAX_INPUT_LENGTH = 10_000


class CommandParser:
    """Turns one command string plus context into one ParseResult.

    Attributes:
        registry: Priority-ordered rules to dispatch over
        max_input_length: Longer commands are truncated before matching
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        max_input_length: int = MAX_INPUT_LENGTH,
    ) -> None:
        """Initialize the command parser.

        Args:
            registry: Rule registry (defaults to the built-in rules)
            max_input_length: Maximum number of characters evaluated
        """
        self.registry = registry if registry is not None else default_registry
        self.max_input_length = max_input_length

    def parse(self, command: str, context: CommandContext | None = None) -> ParseResult:
        """Parse a command through the single-winner, combined and fallback passes.

        Args:
            command: Raw user input, possibly several clauses
            context: What the caller has open (defaults to nothing)

        Returns:
            ParseResult with actions, a clarifying question, or suggestions
        """
        context = context or CommandContext()
        text = command.strip()

        if not text:
            return ParseResult.empty()

        if len(text) > self.max_input_length:
            logger.warning(f"Command truncated from {len(text)} to {self.max_input_length} chars")
            text = text[: self.max_input_length]

        # Pass 1: single winner
        result = self._single_winner(text, context)
        if result is not None:
            return result

        # Pass 2: combine every rule that produced actions
        combined = self._combined(text, context)
        if combined:
            logger.debug(f"Combined {len(combined)} actions for: {text!r}")
            return ParseResult(success=True, actions=combined)

        # Pass 3: suggestions
        message, suggestions = suggest_commands(text)
        logger.debug(f"No rule matched: {text!r}")
        return ParseResult(success=False, error=message, suggestions=suggestions)

    def _single_winner(self, text: str, context: CommandContext) -> ParseResult | None:
        """Pass 1: the first detecting rule that recognizes the shape decides.

        Args:
            text: Trimmed command
            context: Caller context

        Returns:
            ParseResult, or None to continue with the combined pass
        """
        for rule in self.registry:
            if not rule.detect(text, context):
                continue

            rule_result = rule.parse(text, context)
            if not rule_result.matched:
                continue

            if rule_result.missing_info:
                logger.debug(f"Rule {rule.id} needs more info: {rule_result.missing_info}")
                return ParseResult(success=False, missing_info=rule_result.missing_info)

            if rule_result.partial:
                # Other clauses remain; let every rule contribute
                logger.debug(f"Rule {rule.id} matched one clause of several")
                return None

            logger.debug(f"Rule {rule.id} matched with {len(rule_result.actions)} actions")
            return ParseResult(
                success=len(rule_result.actions) > 0,
                actions=list(rule_result.actions),
            )

        return None

    def _combined(self, text: str, context: CommandContext) -> list[ParsedAction]:
        """Pass 2: collect actions from every rule that fully parsed its clause."""
        actions: list[ParsedAction] = []
        for rule in self.registry:
            if not rule.detect(text, context):
                continue
            rule_result = rule.parse(text, context)
            if rule_result.matched and rule_result.actions:
                actions.extend(rule_result.actions)
        return actions

    def capabilities(self) -> dict[str, list[dict[str, Any]]]:
        """Describe the registered rules for help text."""
        return self.registry.capabilities()


def create_parser(
    registry: RuleRegistry | None = None,
    max_input_length: int = MAX_INPUT_LENGTH,
) -> CommandParser:
    """Factory function to create a CommandParser.

    Args:
        registry: Optional rule registry (defaults to the built-in rules)
        max_input_length: Maximum number of characters evaluated

    Returns:
        Configured CommandParser instance
    """
    return CommandParser(registry=registry, max_input_length=max_input_length)


# Module-level instance for convenience
_parser = CommandParser()


def parse_command(command: str, context: CommandContext | None = None) -> ParseResult:
    """Parse a command using the default parser.

    Args:
        command: Raw user input
        context: What the caller has open

    Returns:
        ParseResult
    """
    return _parser.parse(command, context)


def get_capabilities() -> dict[str, list[dict[str, Any]]]:
    """Describe the default registry's rules for help text."""
    return _parser.capabilities()

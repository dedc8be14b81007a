"""Tests for fallback command suggestions."""

from __future__ import annotations

from cmdcenter.core.commands import Suggestion, suggest_commands
from cmdcenter.core.commands.suggestions import (
    DEFAULT_SUGGESTIONS,
    FALLBACK_MESSAGE,
    MAX_SUGGESTIONS,
)


class TestSuggestCommands:
    """Tests for keyword-driven suggestions."""

    def test_defaults_when_nothing_relevant(self) -> None:
        message, suggestions = suggest_commands("xyz nonsense")
        assert message == FALLBACK_MESSAGE
        assert suggestions == list(DEFAULT_SUGGESTIONS)

    def test_export_keywords(self) -> None:
        _, suggestions = suggest_commands("download the estimate")
        assert suggestions[0] == Suggestion("Export estimate PDF", "Export PDF")

    def test_material_keywords(self) -> None:
        _, suggestions = suggest_commands("some lumber please")
        assert [s.command for s in suggestions] == [
            "Add drywall 1050 sf at $12.99",
            "Add 2x4 studs 100 ea at $3.50",
        ]

    def test_hits_keep_battery_order(self) -> None:
        """Export examples come before draft examples regardless of word order."""
        _, suggestions = suggest_commands("finalize then pdf")
        labels = [s.label for s in suggestions]
        assert labels.index("Export estimate PDF") < labels.index("Promote drafts")

    def test_capped(self) -> None:
        _, suggestions = suggest_commands("pdf markup finalize sheetrock")
        assert len(suggestions) == MAX_SUGGESTIONS

    def test_deterministic(self) -> None:
        assert suggest_commands("new plan review") == suggest_commands("new plan review")

    def test_every_suggestion_has_text(self) -> None:
        for command in ("xyz", "export", "tax", "draft", "stud", "generate", "qa", "plan", "create"):
            _, suggestions = suggest_commands(command)
            assert 1 <= len(suggestions) <= MAX_SUGGESTIONS
            for suggestion in suggestions:
                assert suggestion.label
                assert suggestion.command

    def test_to_dict(self) -> None:
        assert Suggestion("Export estimate PDF", "Export PDF").to_dict() == {
            "label": "Export estimate PDF",
            "command": "Export PDF",
        }

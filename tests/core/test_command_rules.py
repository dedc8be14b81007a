"""Tests for the built-in command rules, called directly."""

from __future__ import annotations

import pytest

from cmdcenter.core.commands import CommandContext, RuleResult
from cmdcenter.core.commands.rules.export import export_csv_rule, export_pdf_rule
from cmdcenter.core.commands.rules.labor import ASK_TASK, add_task_rule
from cmdcenter.core.commands.rules.project import create_project_rule, set_defaults_rule
from cmdcenter.core.commands.rules.qa import capabilities_rule, open_plan_rule, show_issues_rule
from cmdcenter.core.commands.rules.takeoff import (
    add_item_rule,
    delete_item_rule,
    generate_drafts_rule,
)

OPEN = CommandContext(project_id="p1")
CLOSED = CommandContext()


def run(rule, command: str, context: CommandContext = OPEN) -> RuleResult:
    assert rule.detect(command, context), f"{rule.id} did not detect {command!r}"
    return rule.parse(command, context)


# ============================================================================
# Project rules
# ============================================================================


class TestCreateProject:
    def test_name_capitalized(self) -> None:
        result = run(create_project_rule, "create project smithfield addition", CLOSED)
        assert result.actions[0].params == {"name": "Smithfield Addition"}
        assert result.actions[0].confidence == pytest.approx(0.9)
        assert not result.partial

    def test_needs_no_project(self) -> None:
        assert create_project_rule.required_context == ()

    def test_partial_when_clauses_follow(self) -> None:
        result = run(create_project_rule, "Create project Smithfield Addition. Tax 7 markup 20", CLOSED)
        assert result.actions[0].params == {"name": "Smithfield Addition"}
        assert result.partial

    def test_keyword_inside_name_kept(self) -> None:
        """Only whole defaults keywords end the name."""
        result = run(create_project_rule, "Create project Taxidermy Studio", CLOSED)
        assert result.actions[0].params == {"name": "Taxidermy Studio"}

    def test_name_stops_at_address(self) -> None:
        result = run(create_project_rule, "Create project Lake House address 12 Shore Rd", CLOSED)
        assert result.actions[0].params == {"name": "Lake House"}

    def test_missing_name_asks(self) -> None:
        result = run(create_project_rule, "Create project markup 20", CLOSED)
        assert result.matched
        assert result.missing_info == "What should the new project be called?"


class TestSetDefaults:
    def test_all_fields(self) -> None:
        result = run(set_defaults_rule, "Set tax 7 markup 20 burden 35 waste 10")
        assert result.actions[0].params == {
            "tax_percent": 7,
            "markup_percent": 20,
            "labor_burden_percent": 35,
            "waste_percent": 10,
        }

    @pytest.mark.parametrize(
        "command,params",
        [
            ("Set markup 15 percent", {"markup_percent": 15}),
            ("Set waste 10%", {"waste_percent": 10}),
            ("Tax rate: 6.5", {"tax_percent": 6.5}),
            ("Set labor burden 30", {"labor_burden_percent": 30}),
            ("Set tax seven markup twenty", {"tax_percent": 7, "markup_percent": 20}),
            ("Set markup thirty five", {"markup_percent": 35}),
        ],
    )
    def test_value_forms(self, command: str, params: dict) -> None:
        assert run(set_defaults_rule, command).actions[0].params == params

    def test_unreadable_value_is_no_match(self) -> None:
        result = run(set_defaults_rule, "Set tax to be determined")
        assert not result.matched

    def test_gated_without_project(self) -> None:
        result = run(set_defaults_rule, "Set tax 7", CLOSED)
        assert result.missing_info == "Please open a project first to set defaults."

    def test_create_in_same_command_lifts_gate(self) -> None:
        result = run(set_defaults_rule, "Create project Barn. Tax 7", CLOSED)
        assert result.actions[0].params == {"tax_percent": 7}


# ============================================================================
# Takeoff rules
# ============================================================================


class TestAddItem:
    def test_without_price(self) -> None:
        params = run(add_item_rule, "Add 2x4 studs 100 ea").actions[0].params
        assert params["description"] == "2x4 Studs"
        assert params["quantity"] == 100
        assert params["unit"] == "EA"
        assert params["unit_cost"] is None
        assert params["category"] == "Framing"

    def test_at_sign_price_and_sheets(self) -> None:
        params = run(add_item_rule, "add drywall 24 sheets @ 14.50").actions[0].params
        assert params["unit"] == "SHT"
        assert params["unit_cost"] == pytest.approx(14.5)

    def test_decimal_quantity(self) -> None:
        params = run(add_item_rule, "Add baseboard 120.5 lf").actions[0].params
        assert params["quantity"] == pytest.approx(120.5)
        assert params["unit"] == "LF"
        assert params["category"] == "Trim"

    def test_draft_flag(self) -> None:
        params = run(add_item_rule, "Add draft insulation 500 sf").actions[0].params
        assert params["draft"] is True

    def test_each_keeps_price(self) -> None:
        params = run(add_item_rule, "Add 2x4 studs 100 each at $3.50").actions[0].params
        assert params["unit"] == "EA"
        assert params["unit_cost"] == pytest.approx(3.5)

    def test_spelled_square_feet(self) -> None:
        params = run(add_item_rule, "Add drywall 1050 sq ft at $12.99").actions[0].params
        assert params["unit"] == "SF"
        assert params["unit_cost"] == pytest.approx(12.99)

    def test_linear_feet(self) -> None:
        params = run(add_item_rule, "Add crown molding 64 linear feet").actions[0].params
        assert params["unit"] == "LF"
        assert params["category"] == "Trim"

    def test_task_lines_not_detected(self) -> None:
        assert not add_item_rule.detect("Add task framing 100 ea", OPEN)
        assert not add_item_rule.detect("Add labor drywall 100 sf", OPEN)


class TestGenerateDrafts:
    def test_assemblies_from_trailing_clause(self) -> None:
        result = run(generate_drafts_rule, "Basement: generate drafts from framing, drywall, electrical")
        params = result.actions[0].params
        assert params["assemblies"] == ["framing", "drywall", "electrical"]
        assert params["project_type"] == "basement_finish"

    def test_unknown_assemblies_ask(self) -> None:
        result = run(generate_drafts_rule, "Generate drafts using magic")
        assert result.missing_info.startswith("Which assemblies?")


def test_delete_item_always_asks() -> None:
    result = run(delete_item_rule, "Delete takeoff item 42")
    assert result.matched
    assert result.actions == []
    assert result.missing_info


# ============================================================================
# Export, QA and utility rules
# ============================================================================


class TestExport:
    @pytest.mark.parametrize(
        "command,which",
        [
            ("Export takeoff CSV", "takeoff"),
            ("Export labor CSV", "labor"),
            ("Export RFIs CSV", "rfis"),
            ("Export assumptions csv", "assumptions"),
            ("Export checklist CSV", "checklist"),
            ("Export everything CSV", "takeoff"),
        ],
    )
    def test_csv_dataset(self, command: str, which: str) -> None:
        assert run(export_csv_rule, command).actions[0].params["which"] == which

    def test_csv_with_drafts(self) -> None:
        params = run(export_csv_rule, "Export takeoff with drafts CSV").actions[0].params
        assert params == {"which": "takeoff", "includeDrafts": True}

    def test_plain_csv_defaults_to_takeoff(self) -> None:
        params = run(export_csv_rule, "Export CSV").actions[0].params
        assert params == {"which": "takeoff", "includeDrafts": False}

    def test_pdf_not_csv(self) -> None:
        assert not export_pdf_rule.detect("Export takeoff CSV", OPEN)


class TestQA:
    @pytest.mark.parametrize("command", ["Show QA issues", "List issues", "Check quality", "show problems"])
    def test_issue_phrasings(self, command: str) -> None:
        assert run(show_issues_rule, command).actions[0].params == {}

    @pytest.mark.parametrize("command", ["What can you do?", "help", "Show capabilities"])
    def test_capability_phrasings(self, command: str) -> None:
        assert run(capabilities_rule, command, CLOSED).actions

    def test_help_must_be_whole_command(self) -> None:
        assert not capabilities_rule.detect("help me add drywall", OPEN)

    def test_open_plan_sheet(self) -> None:
        result = run(open_plan_rule, "Open drawing sheet S2")
        assert result.actions[0].params == {"name": "S2"}


class TestLabor:
    def test_full_line(self) -> None:
        params = run(add_task_rule, "Add task drywall hanging 1050 sf at $1.25").actions[0].params
        assert params == {
            "task_name": "Drywall Hanging",
            "quantity": 1050,
            "unit": "SF",
            "base_rate": 1.25,
            "trade": "Drywall",
        }

    def test_hours_without_rate(self) -> None:
        params = run(add_task_rule, "Add labor task rough wire 12 hours").actions[0].params
        assert params["unit"] == "HR"
        assert params["base_rate"] is None
        assert params["trade"] == "Electrical"

    def test_each_unit_keeps_rate(self) -> None:
        params = run(add_task_rule, "Add task set doors 6 each at $85").actions[0].params
        assert params["unit"] == "EA"
        assert params["base_rate"] == pytest.approx(85.0)

    def test_malformed_line_asks(self) -> None:
        assert run(add_task_rule, "Add task framing").missing_info == ASK_TASK

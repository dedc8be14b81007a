"""One-line previews of proposed actions, shown before confirmation."""

from __future__ import annotations

from .taxonomy import ActionType, ParsedAction


def _scope_word(action: ParsedAction) -> str:
    return "all" if action.params.get("scope") == "all" else "selected"


def format_action_preview(action: ParsedAction) -> str:
    """Describe an action in plain words.

    Args:
        action: Proposed action

    Returns:
        Short description; unknown action types fall back to the type string
    """
    params = action.params
    kind = action.type

    if kind == ActionType.PROJECT_CREATE.value:
        return f'Create project "{params.get("name")}"'
    if kind == ActionType.PROJECT_SET_DEFAULTS.value:
        updates = ", ".join(
            f"{key.replace('_percent', '').replace('_', ' ')} = {value}%"
            for key, value in params.items()
        )
        return f"Set {updates}"
    if kind == ActionType.TAKEOFF_ADD_ITEM.value:
        line = f"Add takeoff: {params.get('description')} ({params.get('quantity')} {params.get('unit')})"
        if params.get("unit_cost") is not None:
            line += f" at ${params['unit_cost']:.2f}"
        return line
    if kind == ActionType.TAKEOFF_GENERATE_DRAFTS.value:
        return f"Generate drafts from {', '.join(params.get('assemblies', []))}"
    if kind == ActionType.TAKEOFF_PROMOTE_DRAFTS.value:
        return f"Promote {_scope_word(action)} drafts"
    if kind == ActionType.TAKEOFF_DELETE_DRAFTS.value:
        return f"Delete {_scope_word(action)} drafts"
    if kind == ActionType.LABOR_ADD_TASK_LINE.value:
        return f"Add labor: {params.get('task_name')} ({params.get('quantity')} {params.get('unit')})"
    if kind == ActionType.EXPORT_PDF.value:
        return "Export PDF estimate"
    if kind == ActionType.EXPORT_CSV.value:
        return f"Export {params.get('which')} CSV"
    if kind == ActionType.QA_SHOW_ISSUES.value:
        return "Show QA issues"
    if kind == ActionType.PLANS_OPEN.value:
        return f"Open plan {params.get('name')}"
    if kind == ActionType.SYSTEM_CAPABILITIES.value:
        return "Show available commands"
    return kind

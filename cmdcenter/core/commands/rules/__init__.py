"""Built-in command rule families.

Each family is a tuple of CommandRule values; the registry flattens and
orders them by priority.
"""

from .export import EXPORT_RULES
from .labor import LABOR_RULES
from .project import PROJECT_RULES
from .qa import QA_RULES
from .takeoff import TAKEOFF_RULES

# Registration order breaks priority ties
RULE_FAMILIES = (
    PROJECT_RULES,
    TAKEOFF_RULES,
    EXPORT_RULES,
    QA_RULES,
    LABOR_RULES,
)

__all__ = [
    "RULE_FAMILIES",
    "PROJECT_RULES",
    "TAKEOFF_RULES",
    "EXPORT_RULES",
    "QA_RULES",
    "LABOR_RULES",
]

"""Normalization helpers shared by the command rules.

Everything here is a pure function over strings: unit aliases, spelled
numbers, capitalization, keyword-based category/trade/project-type
inference, assembly-name extraction and numeric-variable extraction.
"""

from __future__ import annotations

import re

# Unit aliases -> canonical unit codes
# Keys are lowercase with single spaces
UNIT_ALIASES: dict[str, str] = {
    # Area
    "sf": "SF",
    "sqft": "SF",
    "sq ft": "SF",
    "square feet": "SF",
    "square foot": "SF",
    # Length
    "lf": "LF",
    "linear feet": "LF",
    "linear foot": "LF",
    "ft": "LF",
    "feet": "LF",
    # Count
    "ea": "EA",
    "each": "EA",
    "pc": "EA",
    "pcs": "EA",
    "pieces": "EA",
    # Sheet goods
    "sheet": "SHT",
    "sheets": "SHT",
    # Lumber
    "bd ft": "BF",
    "board feet": "BF",
    # Volume
    "cy": "CY",
    "cubic yard": "CY",
    "cubic yards": "CY",
    "sy": "SY",
    "square yard": "SY",
    "square yards": "SY",
    # Labor time
    "hr": "HR",
    "hour": "HR",
    "hours": "HR",
}

WORD_NUMBERS: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
    "hundred": 100,
}

_TENS_WORDS = frozenset(
    ("twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety")
)
_ONES_WORDS = frozenset(
    ("one", "two", "three", "four", "five", "six", "seven", "eight", "nine")
)

# Same leniency as a prefix float parse: "7%" -> 7, "12.5ft" -> 12.5
_NUMERIC_PREFIX = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)")

# (category, keywords) - order is significant, first hit wins
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Drywall", ("drywall", "sheetrock")),
    ("Framing", ("stud", "plate", "framing")),
    ("Insulation", ("insulation", "r-")),
    ("Paint", ("paint", "primer")),
    ("Electrical", ("electrical", "wire", "outlet")),
    ("Plumbing", ("plumb", "pipe", "drain")),
    ("HVAC", ("hvac", "duct")),
    ("Flooring", ("floor", "tile", "carpet")),
    ("Doors", ("door",)),
    ("Windows", ("window",)),
    ("Trim", ("trim", "molding", "baseboard")),
)

TRADE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Drywall", ("drywall", "tape", "mud")),
    ("Framing", ("fram", "stud", "carpent")),
    ("Electrical", ("electric", "wire")),
    ("Plumbing", ("plumb", "pipe")),
    ("Paint", ("paint",)),
    ("HVAC", ("hvac", "duct")),
)

PROJECT_TYPE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("basement", "basement_finish"),
    ("deck", "deck"),
    ("roof", "roofing"),
    ("siding", "siding"),
    ("kitchen", "kitchen_remodel"),
    ("bath", "bathroom_remodel"),
)
DEFAULT_PROJECT_TYPE = "basement_finish"

# (assembly, keywords) - checked per delimited piece, first hit wins
ASSEMBLY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("framing", ("framing", "frame")),
    ("drywall", ("drywall", "sheetrock")),
    ("electrical", ("electrical", "electric")),
    ("plumbing", ("plumb",)),
    ("insulation", ("insulation",)),
    ("paint", ("paint",)),
    ("trim", ("trim",)),
    ("flooring", ("flooring", "floor")),
    ("hvac", ("hvac",)),
    ("doors", ("door",)),
    ("windows", ("window",)),
    ("deck", ("deck",)),
    ("roofing", ("roof",)),
    ("siding", ("siding",)),
)

_ASSEMBLY_DELIMITERS = re.compile(r"[,+&]|\s+and\s+|\s+with\s+", re.IGNORECASE)

_NUM = r"(\d+(?:\.\d+)?)"
_INT = r"(\d+)"
_SF = r"(?:sf|sq\s*ft)"

# (variable keys, patterns) - the first pattern that matches wins for its keys
VARIABLE_PATTERNS: tuple[tuple[tuple[str, ...], tuple[re.Pattern[str], ...]], ...] = (
    (
        ("wall_lf",),
        (
            re.compile(_NUM + r"\s*(?:lf|linear\s*(?:feet|ft)|ft|')\s*(?:of\s*)?(?:walls?|framing)"),
            re.compile(r"walls?\s*" + _NUM + r"\s*(?:lf|linear\s*(?:feet|ft)|ft|')"),
        ),
    ),
    (
        ("wall_sf",),
        (
            re.compile(_NUM + r"\s*(?:sf|sq\s*ft|square\s*feet)\s*(?:of\s*)?(?:drywall|walls?)"),
            re.compile(r"drywall\s*" + _NUM + r"\s*" + _SF),
        ),
    ),
    (
        ("ceiling_sf",),
        (
            re.compile(_NUM + r"\s*" + _SF + r"\s*(?:of\s*)?ceiling"),
            re.compile(r"ceilings?\s*" + _NUM + r"\s*" + _SF),
        ),
    ),
    (
        ("ceiling_height",),
        (
            re.compile(_NUM + r"\s*(?:ft|feet|foot|')\s*(?:ceiling|high|tall)"),
            re.compile(r"ceilings?\s*height\s*(?:of\s*)?" + _NUM),
        ),
    ),
    (
        ("doors_count", "door_count"),
        (re.compile(_INT + r"\s*(?:interior\s*)?doors?"),),
    ),
    (
        ("windows_count", "window_count"),
        (re.compile(_INT + r"\s*windows?"),),
    ),
    (
        ("soffit_lf",),
        (
            re.compile(_NUM + r"\s*(?:lf|ft|')\s*(?:of\s*)?soffit"),
            re.compile(r"soffits?\s*" + _NUM + r"\s*(?:lf|ft|')"),
        ),
    ),
    (
        ("floor_sf",),
        (re.compile(_NUM + r"\s*" + _SF + r"\s*(?:of\s*)?floor"),),
    ),
    (
        ("deck_sf",),
        (
            re.compile(r"deck\s*" + _NUM + r"\s*" + _SF),
            re.compile(_NUM + r"\s*" + _SF + r"\s*(?:of\s*)?deck"),
        ),
    ),
)

_PRICE = re.compile(r"\$?(\d+(?:\.\d{1,2})?)")


def as_number(raw: str) -> int | float:
    """Convert a numeric string, keeping integral values as int.

    Args:
        raw: Digits with optional sign and decimal part

    Returns:
        int for whole numbers ("1050" -> 1050), float otherwise
    """
    value = float(raw)
    return int(value) if value.is_integer() else value


def normalize_unit(unit: str) -> str:
    """Map a unit alias to its canonical code.

    Lookup is case-insensitive and ignores surrounding/repeated whitespace.
    Unknown units are upper-cased as a best-effort code, so the function is
    total and idempotent.

    Args:
        unit: Raw unit text ("sq ft", "Each", "sheets")

    Returns:
        Canonical unit code ("SF", "EA", "SHT") or the upper-cased input
    """
    key = " ".join(unit.casefold().split())
    return UNIT_ALIASES.get(key) or unit.upper()


def parse_number(text: str) -> int | float | None:
    """Parse a number given as digits or English words.

    Args:
        text: "7", "12.5", "seven", "thirty five", "thirty-five"

    Returns:
        The value, or None when the text is not a number. Zero is a valid
        value and is distinct from None.
    """
    match = _NUMERIC_PREFIX.match(text)
    if match:
        return as_number(match.group(0))

    lower = text.strip().lower()
    if lower in WORD_NUMBERS:
        return WORD_NUMBERS[lower]

    parts = [p for p in re.split(r"[\s-]+", lower) if p]
    if len(parts) == 2 and parts[0] in _TENS_WORDS and parts[1] in _ONES_WORDS:
        return WORD_NUMBERS[parts[0]] + WORD_NUMBERS[parts[1]]

    return None


def parse_price(text: str) -> float | None:
    """Extract the first monetary value ("$12.99", "12.99", "$12")."""
    match = _PRICE.search(text)
    if match:
        return float(match.group(1))
    return None


def capitalize_words(text: str) -> str:
    """Upper-case the first character of each space-separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def _first_keyword_hit(
    text: str, table: tuple[tuple[str, tuple[str, ...]], ...], default: str | None
) -> str | None:
    lower = text.lower()
    for label, keywords in table:
        if any(keyword in lower for keyword in keywords):
            return label
    return default


def infer_category(description: str) -> str:
    """Infer a takeoff category from an item description."""
    return _first_keyword_hit(description, CATEGORY_KEYWORDS, "General")


def infer_trade(task_name: str) -> str:
    """Infer the labor trade for a task name."""
    return _first_keyword_hit(task_name, TRADE_KEYWORDS, "General")


def infer_project_type(text: str) -> str:
    """Infer a project type from keywords, defaulting to a basement finish."""
    lower = text.lower()
    for keyword, project_type in PROJECT_TYPE_KEYWORDS:
        if keyword in lower:
            return project_type
    return DEFAULT_PROJECT_TYPE


def extract_assembly_names(text: str) -> list[str]:
    """Extract known assembly names from a delimited phrase.

    "framing + drywall, electrical and paint" ->
    ["framing", "drywall", "electrical", "paint"]

    Args:
        text: Phrase listing assemblies, separated by , & + "and" "with"

    Returns:
        Assembly names in order of first occurrence, without duplicates
    """
    assemblies: list[str] = []
    for piece in _ASSEMBLY_DELIMITERS.split(text):
        cleaned = piece.strip()
        if not cleaned:
            continue
        name = _first_keyword_hit(cleaned, ASSEMBLY_KEYWORDS, None)
        if name is not None and name not in assemblies:
            assemblies.append(name)
    return assemblies


def extract_variables(command: str) -> dict[str, int | float]:
    """Pull named quantities (wall LF, ceiling height, door count, ...) from text.

    Each quantity is independent; quantities that are not mentioned are
    omitted rather than defaulted.

    Args:
        command: Full command text

    Returns:
        Mapping of variable name to value
    """
    lower = command.lower()
    variables: dict[str, int | float] = {}

    for keys, patterns in VARIABLE_PATTERNS:
        for pattern in patterns:
            match = pattern.search(lower)
            if match:
                value = as_number(match.group(1))
                for key in keys:
                    variables[key] = value
                break

    return variables


__all__ = [
    "UNIT_ALIASES",
    "WORD_NUMBERS",
    "DEFAULT_PROJECT_TYPE",
    "as_number",
    "normalize_unit",
    "parse_number",
    "parse_price",
    "capitalize_words",
    "infer_category",
    "infer_trade",
    "infer_project_type",
    "extract_assembly_names",
    "extract_variables",
]

"""Diet plan text parser.

Turns loosely formatted Arabic plan text into ordered meal sections and
macro totals. The parse is a single forward pass over normalized lines:

1. a line starting with a meal title opens a new section,
2. a line starting with a macro label sets a stat, taking its number from the
   same line or, failing that, from a purely numeric next line,
3. a numeric line right after a macro line is that macro's value and is
   skipped,
4. anything else is appended to the open section, or dropped if none is open.

Keyword detection needs start-of-text or whitespace before the keyword, so a
keyword glued to preceding punctuation is not split out.
"""

import re
from typing import Dict, List, Optional

from core.logger import get_logger
from data.keywords import (
    DEFAULT_ICON,
    LINE_BREAK_KEYWORDS,
    MACRO_KEYWORDS,
    MEAL_ICONS,
    MEAL_TITLES,
    NOTES_MARKER,
)
from schemas.plan_schema import MealEntry, ParseResult

logger = get_logger("services.diet_parser")

LINE_BREAK = "<br>"

# Surrounding whitespace and straight or curly double quotes
_EDGE_RE = re.compile(r'^[\s"“”]+|[\s"“”]+$')
# Alternation order follows the keyword tables so longer forms win
_KEYWORD_RE = re.compile(
    r"(^|\s)(" + "|".join(re.escape(k) for k in LINE_BREAK_KEYWORDS) + ")"
)
_LEADING_SEPARATOR_RE = re.compile(r"^[:\-]\s*")
_NUMBER_RE = re.compile(r"[0-9]+")
_NUMERIC_LINE_RE = re.compile(r"^[0-9]+$")


def normalize_lines(text: str) -> List[str]:
    """Split raw plan text into trimmed, non-empty lines.

    Every recognized keyword preceded by start-of-text or whitespace is moved
    to the start of its own line.
    """
    cleaned = _EDGE_RE.sub("", text or "")
    cleaned = _KEYWORD_RE.sub(lambda m: "\n" + m.group(2), cleaned)
    return [line.strip() for line in cleaned.split("\n") if line.strip()]


def match_meal_title(line: str) -> Optional[str]:
    for title in MEAL_TITLES:
        if line.startswith(title):
            return title
    return None


def match_macro_key(line: str) -> Optional[str]:
    """Return the stat key ('calories', 'protein', 'carbs', 'fats') a line starts with."""
    for label, key in MACRO_KEYWORDS:
        if line.startswith(label):
            return key
    return None


def is_numeric_line(line: str) -> bool:
    return bool(_NUMERIC_LINE_RE.match(line))


def _open_meal(title: str, line: str) -> MealEntry:
    rest = _LEADING_SEPARATOR_RE.sub("", line[len(title):].strip())
    return MealEntry(
        title=title,
        items=rest,
        is_notes=NOTES_MARKER in title,
        icon=MEAL_ICONS.get(title, DEFAULT_ICON),
    )


def _macro_value(lines: List[str], idx: int) -> Optional[str]:
    match = _NUMBER_RE.search(lines[idx])
    if match:
        return match.group(0)
    if idx + 1 < len(lines) and is_numeric_line(lines[idx + 1]):
        return lines[idx + 1]
    return None


def parse_diet_plan(text: str) -> ParseResult:
    """Parse plan text into a `ParseResult`.

    Never raises for string input: unrecognized content is either absorbed
    into the open section or dropped.

    Args:
        text: Free-form plan text, typed by hand or returned by an AI provider.

    Returns:
        ParseResult with meals in input order and the stats that were found.
    """
    lines = normalize_lines(text)
    meals: List[MealEntry] = []
    stats: Dict[str, str] = {}
    current: Optional[MealEntry] = None

    for idx, line in enumerate(lines):
        title = match_meal_title(line)
        if title:
            if current is not None:
                meals.append(current)
            current = _open_meal(title, line)
            continue

        key = match_macro_key(line)
        if key:
            value = _macro_value(lines, idx)
            if value is not None:
                stats[key] = value
            continue

        if is_numeric_line(line) and idx > 0 and match_macro_key(lines[idx - 1]):
            continue

        if current is not None:
            current.items += (LINE_BREAK if current.items else "") + line

    if current is not None:
        meals.append(current)

    logger.debug("Parsed %d lines into %d meals, stats=%s", len(lines), len(meals), sorted(stats))
    return ParseResult(meals=meals, stats=stats)


class DietPlanParser:
    """Stateless parser service; each call builds a fresh result."""

    def parse(self, text: str) -> ParseResult:
        return parse_diet_plan(text)

    def normalize(self, text: str) -> List[str]:
        return normalize_lines(text)


# export singleton
diet_parser = DietPlanParser()
__all__ = [
    "DietPlanParser",
    "diet_parser",
    "parse_diet_plan",
    "normalize_lines",
    "match_meal_title",
    "match_macro_key",
    "LINE_BREAK",
]

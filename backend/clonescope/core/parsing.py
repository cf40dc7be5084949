"""
Free-text numeric extraction for cost and timeline strings.

Estimates travel through the pipeline as display strings such as
"$30,000-$75,000", "$200-$1,000/month" or "1 year 6 months". These helpers
pull numbers back out of them. Malformed input is a data-quality problem, not
an error: every parser returns its documented default instead of raising.
"""

import math
import re

# Fallbacks used when a string carries no usable number
DEFAULT_DEVELOPMENT_COST = 50_000
DEFAULT_MONTHLY_COST = 200
DEFAULT_TIMELINE_WEEKS = 24

WEEKS_PER_UNIT = {
    "week": 1,
    "month": 4,
    "year": 52,
}

_DOLLAR_PATTERN = re.compile(r"\$\s*([0-9][0-9,]*)")
# "4-6 weeks" keeps the lower bound
_DURATION_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)(?:\s*-\s*\d+(?:\.\d+)?)?\s*(week|month|year)s?",
    re.IGNORECASE,
)
# Separadores admitidos entre las partes de "1 year, 6 months"
_COMPOUND_GAP = re.compile(r"\s*(?:,|and)?\s*", re.IGNORECASE)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always going up."""
    return int(math.floor(value + 0.5))


def extract_dollar_amount(text: str | None, default: int) -> int:
    """Return the first dollar figure in ``text`` (e.g. "$30,000-$75,000" -> 30000)."""
    if not text:
        return default
    match = _DOLLAR_PATTERN.search(text)
    if not match:
        return default
    digits = match.group(1).replace(",", "")
    return int(digits) if digits else default


def extract_development_cost(text: str | None) -> int:
    return extract_dollar_amount(text, DEFAULT_DEVELOPMENT_COST)


def extract_monthly_cost(text: str | None) -> int:
    return extract_dollar_amount(text, DEFAULT_MONTHLY_COST)


def parse_duration_weeks(text: str | None, default: int = DEFAULT_TIMELINE_WEEKS) -> float:
    """
    Convert a human duration into weeks.

    Units are week, month (x4) and year (x52). Compound durations in descending
    units ("1 year 6 months") are summed; anything else, including ranges such
    as "6 months - 1 year", keeps the first number-and-unit pair. Strings without
    a recognizable pair fall back to ``default``.
    """
    if not text:
        return default
    matches = list(_DURATION_PATTERN.finditer(text))
    if not matches:
        return default

    total = _match_weeks(matches[0])
    previous = matches[0]
    for match in matches[1:]:
        gap = text[previous.end():match.start()]
        if not _COMPOUND_GAP.fullmatch(gap) or _unit_weeks(match) >= _unit_weeks(previous):
            break
        total += _match_weeks(match)
        previous = match
    return total


def _unit_weeks(match: re.Match) -> int:
    return WEEKS_PER_UNIT[match.group(2).lower()]


def _match_weeks(match: re.Match) -> float:
    return float(match.group(1)) * _unit_weeks(match)


def format_weeks(weeks: int) -> str:
    """Render a week count the way estimates are displayed ("3 weeks", "6 months", "1 year 2 months")."""
    if weeks < 4:
        return f"{weeks} weeks"
    months = round_half_up(weeks / 4)
    if months < 12:
        return f"{months} months"
    years, remaining_months = divmod(months, 12)
    label = f"{years} year{'s' if years > 1 else ''}"
    if remaining_months == 0:
        return label
    return f"{label} {remaining_months} months"

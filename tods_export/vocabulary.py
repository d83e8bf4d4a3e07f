"""Status, type and category vocabularies of the export."""

import math
from typing import Any, Optional

ABANDONED = 'ABANDONED'
COMPLETED = 'COMPLETED'
DEFAULTED = 'DEFAULTED'
DEAD_RUBBER = 'DEAD_RUBBER'
DOUBLE_WALKOVER = 'DOUBLE_WALKOVER'
RETIRED = 'RETIRED'
WALKOVER = 'WALKOVER'

SINGLES = 'SINGLES'
DOUBLES = 'DOUBLES'

COMPLETED_STATUSES = frozenset({
    ABANDONED,
    COMPLETED,
    DEFAULTED,
    DEAD_RUBBER,
    DOUBLE_WALKOVER,
    RETIRED,
    WALKOVER,
})

EXPORTABLE_TYPES = frozenset({SINGLES, DOUBLES})

STATUS_CODES: dict[str, str] = {
    WALKOVER: 'WO',
    RETIRED: 'RET',
    DEFAULTED: 'DEF',
    COMPLETED: 'CO',
}

# Placeholder until levels are carried by the source data
DEFAULT_TOURNAMENT_LEVEL = 'NAT'


def convert_matchup_status(matchup_status: Optional[str]) -> Optional[str]:
    """Map a matchUp status to its export code.

    Completed statuses without an export code (ABANDONED, DEAD_RUBBER,
    DOUBLE_WALKOVER) are exported as the raw status term.
    """
    if not matchup_status:
        return None
    return STATUS_CODES.get(matchup_status, matchup_status)


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number)


def convert_age_category_code(age_category_code: Any) -> Optional[str]:
    """Normalize an age category: numeric values become ``U<value>``.

    Args:
        age_category_code: Raw category value (e.g. ``"18"``, ``"Open"``).

    Returns:
        ``"U18"`` for numeric input, the unchanged value otherwise and
        None for an absent category.
    """
    if age_category_code is None or age_category_code == '':
        return None
    if _is_numeric(age_category_code):
        if isinstance(age_category_code, float) and age_category_code.is_integer():
            age_category_code = int(age_category_code)
        return f'U{age_category_code}'
    return age_category_code

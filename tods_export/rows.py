"""Construction of export rows from matchUps in context."""

from typing import Any, Optional

from tods_export import ExportRow
from tods_export.engine import TournamentContext, TournamentRecord
from tods_export.participants import find_person_id, resolve_individual_ids
from tods_export.vocabulary import (
    DEFAULT_TOURNAMENT_LEVEL,
    convert_age_category_code,
    convert_matchup_status,
)


def _nth(values: list[str], index: int) -> Optional[str]:
    return values[index] if index < len(values) else None


def _first_letter(value: Optional[str]) -> Optional[str]:
    return value[0] if value else None


def _category_value(category: Any) -> Any:
    """Raw age category of a matchUp category descriptor."""
    if isinstance(category, dict):
        return (
            category.get('ageCategoryCode')
            or category.get('AgeCategoryCode')
            or category.get('categoryName')
        )
    return category


def select_score(matchup: dict) -> Optional[str]:
    """Score string of the winning side.

    Side 2's string when side 2 won, side 1's string otherwise (also
    when no winner is set).
    """
    score = matchup.get('score') or {}
    if matchup.get('winningSide') == 2:
        return score.get('scoreStringSide2')
    return score.get('scoreStringSide1')


def build_row(
    matchup: dict,
    tournament: TournamentRecord,
    context: TournamentContext,
    tournament_level: str = DEFAULT_TOURNAMENT_LEVEL,
) -> ExportRow:
    """Build the export row for one completed matchUp.

    Args:
        matchup: MatchUp in context.
        tournament: Owning tournament.
        context: Query context used for participant resolution.
        tournament_level: Constant level code written to every row.

    Returns:
        The export row.

    Raises:
        MissingSideParticipant: If either side cannot be resolved.
    """
    side1_ids = resolve_individual_ids(matchup, 1, context)
    side2_ids = resolve_individual_ids(matchup, 2, context)

    schedule = matchup.get('schedule') or {}
    matchup_type = matchup.get('matchUpType')

    return ExportRow(
        matchup_id=matchup.get('matchUpId'),
        side1_player1_id=find_person_id(_nth(side1_ids, 0), context),
        side1_player2_id=find_person_id(_nth(side1_ids, 1), context),
        side2_player1_id=find_person_id(_nth(side2_ids, 0), context),
        side2_player2_id=find_person_id(_nth(side2_ids, 1), context),
        winning_side=matchup.get('winningSide'),
        score=select_score(matchup),
        matchup_status=convert_matchup_status(matchup.get('matchUpStatus')),
        matchup_type=_first_letter(matchup_type),
        tournament_name=tournament.name,
        tournament_id=tournament.tournament_id,
        matchup_format=matchup.get('matchUpFormat'),
        matchup_start_date=schedule.get('scheduledDate') or tournament.start_date,
        tournament_start_date=tournament.start_date,
        tournament_end_date=tournament.end_date,
        age_category_code=convert_age_category_code(
            _category_value(matchup.get('category'))
        ),
        tournament_level=tournament_level,
        gender=_first_letter(matchup.get('gender')),
        draw_id=matchup.get('drawId'),
        round_number=matchup.get('roundNumber'),
        round_position=matchup.get('roundPosition'),
    )

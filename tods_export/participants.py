"""Resolution of matchUp sides to individual person identifiers."""

import logging
from typing import Optional

from tods_export import MissingSideParticipant
from tods_export.engine import TournamentContext
from tods_export.vocabulary import SINGLES

log = logging.getLogger(__name__)


def _find_side(matchup: dict, side_number: int) -> Optional[dict]:
    for side in matchup.get('sides') or []:
        if side.get('sideNumber') == side_number:
            return side
    return None


def resolve_individual_ids(
    matchup: dict,
    side_number: int,
    context: TournamentContext,
) -> list[str]:
    """Resolve one side of a matchUp to its individual participant ids.

    SINGLES sides yield the side participant itself, DOUBLES sides the
    ``individualParticipantIds`` of the pair (fewer than two when the
    data is incomplete).

    Args:
        matchup: MatchUp in context, as returned by the engine.
        side_number: 1 or 2.
        context: Query context of the owning tournament.

    Returns:
        Ordered list of 0-2 participant ids.

    Raises:
        MissingSideParticipant: If the side, its participant id or the
            participant itself cannot be found.
    """
    side = _find_side(matchup, side_number)
    participant_id = side.get('participantId') if side else None
    participant = context.find_participant(participant_id)
    if participant is None:
        log.debug(
            "Seite %d von MatchUp %s ohne Teilnehmer",
            side_number, matchup.get('matchUpId'),
        )
        raise MissingSideParticipant(side_number=side_number)

    if matchup.get('matchUpType') == SINGLES:
        return [participant.get('participantId')]
    return list(participant.get('individualParticipantIds') or [])


def find_person_id(
    participant_id: Optional[str],
    context: TournamentContext,
) -> Optional[str]:
    """Person id linked to an individual participant, or None."""
    if not participant_id:
        return None
    participant = context.find_participant(participant_id)
    person = (participant or {}).get('person') or {}
    return person.get('personId')

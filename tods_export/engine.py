"""Read-only query view over a TODS tournament record.

Replaces a global "current tournament" engine: every loaded record gets
its own :class:`TournamentContext`, which is passed explicitly into
participant resolution and row building.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from tods_export import EngineProcessingFailure

log = logging.getLogger(__name__)

SCHEDULED_DATE = 'SCHEDULE.DATE'


def organisation_id_of(record: dict) -> Optional[str]:
    """Owning organisation of a tournament record.

    ``parentOrganisationId`` wins, ``unifiedTournamentId.organisationId``
    is the fallback.
    """
    unified = record.get('unifiedTournamentId')
    unified_organisation_id = (
        unified.get('organisationId') if isinstance(unified, dict) else None
    )
    return record.get('parentOrganisationId') or unified_organisation_id


@dataclass
class TournamentRecord:
    """Tournament-level attributes used by the export."""

    tournament_id: Optional[str]
    name: Optional[str]
    start_date: Optional[str]
    end_date: Optional[str]
    organisation_id: Optional[str]
    events: Optional[list[dict]] = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, record: dict) -> 'TournamentRecord':
        return cls(
            tournament_id=record.get('tournamentId'),
            name=record.get('tournamentName') or record.get('name'),
            start_date=record.get('startDate'),
            end_date=record.get('endDate'),
            organisation_id=organisation_id_of(record),
            events=record.get('events'),
            raw=record,
        )

    @property
    def event_types(self) -> Optional[list[str]]:
        """Distinct event types in order of appearance, None without events."""
        if self.events is None:
            return None
        event_types: list[str] = []
        for event in self.events:
            event_type = event.get('eventType')
            if event_type and event_type not in event_types:
                event_types.append(event_type)
        return event_types


def _scheduled_date(matchup: dict) -> Optional[str]:
    """Latest SCHEDULE.DATE time item of a matchUp."""
    scheduled = None
    for item in matchup.get('timeItems') or []:
        if item.get('itemType') == SCHEDULED_DATE:
            scheduled = item.get('itemValue')
    return scheduled


def _draw_position_key(draw_position: Any) -> tuple[bool, int]:
    return (draw_position is None, draw_position or 0)


class TournamentContext:
    """Participants and matchUps of one loaded tournament record."""

    def __init__(self, record: dict):
        if not isinstance(record, dict):
            raise EngineProcessingFailure('Turnierdatensatz ist kein JSON-Objekt')
        self.record = record
        self.tournament_id = record.get('tournamentId')
        self._participants: dict[str, dict] = {}
        for participant in record.get('participants') or []:
            participant_id = participant.get('participantId')
            if participant_id:
                self._participants[participant_id] = participant

    def find_participant(self, participant_id: Optional[str]) -> Optional[dict]:
        """Participant with the given id, or None."""
        if not participant_id:
            return None
        return self._participants.get(participant_id)

    def all_matchups(self) -> list[dict]:
        """All matchUps of the tournament with event/draw context attached.

        Raises:
            EngineProcessingFailure: If the record structure is malformed.
        """
        matchups: list[dict] = []
        try:
            for event in self.record.get('events') or []:
                for draw in event.get('drawDefinitions') or []:
                    for structure in draw.get('structures') or []:
                        matchups.extend(
                            self._structure_matchups(event, draw, structure, {})
                        )
        except (AttributeError, TypeError) as exc:
            raise EngineProcessingFailure(
                f"Ungueltiger Turnierdatensatz {self.tournament_id}: {exc}"
            ) from exc
        log.debug("%d MatchUps in Turnier %s", len(matchups), self.tournament_id)
        return matchups

    def _structure_matchups(
        self,
        event: dict,
        draw: dict,
        structure: dict,
        inherited_assignments: dict[int, Optional[str]],
    ) -> Iterator[dict]:
        assignments = dict(inherited_assignments)
        for assignment in structure.get('positionAssignments') or []:
            if assignment.get('drawPosition') is not None:
                assignments[assignment['drawPosition']] = assignment.get('participantId')

        # Container structures (round robin) hold their groups as children
        for child in structure.get('structures') or []:
            yield from self._structure_matchups(event, draw, child, assignments)

        for matchup in structure.get('matchUps') or []:
            in_context = self._in_context(matchup, event, draw, structure, assignments)
            yield in_context
            for tie_matchup in matchup.get('tieMatchUps') or []:
                tie_in_context = self._in_context(
                    tie_matchup, event, draw, structure, assignments,
                )
                tie_in_context['matchUpTieId'] = matchup.get('matchUpId')
                yield tie_in_context

    def _in_context(
        self,
        matchup: dict,
        event: dict,
        draw: dict,
        structure: dict,
        assignments: dict[int, Optional[str]],
    ) -> dict:
        in_context = dict(matchup)
        in_context.pop('tieMatchUps', None)
        in_context['tournamentId'] = self.tournament_id
        in_context['eventId'] = event.get('eventId')
        in_context['eventName'] = event.get('eventName')
        in_context['drawId'] = draw.get('drawId')
        in_context['structureId'] = structure.get('structureId')
        in_context['matchUpType'] = (
            matchup.get('matchUpType')
            or draw.get('matchUpType')
            or event.get('eventType')
        )
        in_context['matchUpFormat'] = (
            matchup.get('matchUpFormat')
            or structure.get('matchUpFormat')
            or draw.get('matchUpFormat')
            or event.get('matchUpFormat')
        )
        in_context['gender'] = matchup.get('gender') or event.get('gender')
        in_context['category'] = matchup.get('category') or event.get('category')
        in_context['score'] = matchup.get('score') or {}

        schedule = dict(matchup.get('schedule') or {})
        if not schedule.get('scheduledDate'):
            schedule['scheduledDate'] = _scheduled_date(matchup)
        in_context['schedule'] = schedule

        if not matchup.get('sides'):
            draw_positions = sorted(
                matchup.get('drawPositions') or [], key=_draw_position_key,
            )
            in_context['sides'] = [
                {
                    'sideNumber': side_number,
                    'drawPosition': draw_position,
                    'participantId': (
                        assignments.get(draw_position)
                        if draw_position is not None else None
                    ),
                }
                for side_number, draw_position in enumerate(draw_positions, start=1)
            ]
        return in_context


def load_tournament(record: dict) -> TournamentContext:
    """Load a tournament record as a query context."""
    return TournamentContext(record)

"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from tods_export.engine import TournamentContext, TournamentRecord, load_tournament
from tods_export.loader import read_tournament


DATA_DIR = Path(__file__).resolve().parent / 'data'


@pytest.fixture(scope='session')
def data_dir() -> Path:
    """Path to the sample tournament files."""
    return DATA_DIR


@pytest.fixture
def spring_record() -> dict:
    """Raw record of the Spring Open (singles + doubles, ORG-A)."""
    return read_tournament(DATA_DIR / 'spring-open_T1.tods.json')


@pytest.fixture
def spring_context(spring_record) -> TournamentContext:
    return load_tournament(spring_record)


@pytest.fixture
def spring_tournament(spring_record) -> TournamentRecord:
    return TournamentRecord.from_dict(spring_record)


@pytest.fixture
def spring_matchups(spring_context) -> dict[str, dict]:
    """MatchUps in context of the Spring Open, keyed by matchUpId."""
    return {m['matchUpId']: m for m in spring_context.all_matchups()}


@pytest.fixture
def write_tournament(tmp_path):
    """Write a tournament record into tmp_path and return its file name."""
    def _write(filename: str, record: dict) -> str:
        (tmp_path / filename).write_text(json.dumps(record), encoding='utf-8')
        return filename
    return _write


def singles_record(
    tournament_id: str,
    organisation_id: str | None = 'ORG-A',
    matchups: int = 1,
) -> dict:
    """Minimal singles tournament with ``matchups`` completed matchUps."""
    participants = []
    assignments = []
    structure_matchups = []
    for i in range(matchups):
        for position in (2 * i + 1, 2 * i + 2):
            participant_id = f'{tournament_id}-I{position}'
            participants.append({
                'participantId': participant_id,
                'participantType': 'INDIVIDUAL',
                'person': {'personId': f'{tournament_id}-PER-{position}'},
            })
            assignments.append({'drawPosition': position, 'participantId': participant_id})
        structure_matchups.append({
            'matchUpId': f'{tournament_id}-M{i + 1}',
            'roundNumber': 1,
            'roundPosition': i + 1,
            'drawPositions': [2 * i + 1, 2 * i + 2],
            'matchUpStatus': 'COMPLETED',
            'winningSide': 1,
            'score': {'scoreStringSide1': '6-1 6-1', 'scoreStringSide2': '1-6 1-6'},
        })
    record = {
        'tournamentId': tournament_id,
        'tournamentName': f'Tournament {tournament_id}',
        'startDate': '2024-01-01',
        'endDate': '2024-01-02',
        'participants': participants,
        'events': [{
            'eventId': f'{tournament_id}-E',
            'eventType': 'SINGLES',
            'drawDefinitions': [{
                'drawId': f'{tournament_id}-D',
                'structures': [{
                    'structureId': f'{tournament_id}-S',
                    'positionAssignments': assignments,
                    'matchUps': structure_matchups,
                }],
            }],
        }],
    }
    if organisation_id:
        record['parentOrganisationId'] = organisation_id
    return record

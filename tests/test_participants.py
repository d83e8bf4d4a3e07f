"""Tests for tods_export.participants module."""

import pytest

from tods_export import MissingSideParticipant
from tods_export.engine import TournamentContext
from tods_export.participants import find_person_id, resolve_individual_ids


def _context() -> TournamentContext:
    return TournamentContext({
        'participants': [
            {'participantId': 'A', 'person': {'personId': 'P1'}},
            {'participantId': 'B'},
            {'participantId': 'C', 'person': {'personId': 'P3'}},
            {'participantId': 'PAIR-AB', 'individualParticipantIds': ['A', 'B']},
            {'participantId': 'PAIR-C', 'individualParticipantIds': ['C']},
            {'participantId': 'PAIR-EMPTY'},
        ],
    })


def _matchup(matchup_type: str, side1: str | None, side2: str | None = 'C') -> dict:
    return {
        'matchUpId': 'M',
        'matchUpType': matchup_type,
        'sides': [
            {'sideNumber': 1, 'participantId': side1},
            {'sideNumber': 2, 'participantId': side2},
        ],
    }


class TestResolveIndividualIds:
    """Tests for side resolution."""

    def test_singles(self):
        assert resolve_individual_ids(_matchup('SINGLES', 'A'), 1, _context()) == ['A']

    def test_doubles(self):
        assert resolve_individual_ids(_matchup('DOUBLES', 'PAIR-AB'), 1, _context()) == ['A', 'B']

    def test_doubles_incomplete_pair(self):
        assert resolve_individual_ids(_matchup('DOUBLES', 'PAIR-C'), 1, _context()) == ['C']

    def test_doubles_without_individuals(self):
        assert resolve_individual_ids(_matchup('DOUBLES', 'PAIR-EMPTY'), 1, _context()) == []

    def test_second_side(self):
        assert resolve_individual_ids(_matchup('SINGLES', 'A', 'B'), 2, _context()) == ['B']

    def test_missing_participant_id(self):
        with pytest.raises(MissingSideParticipant) as exc_info:
            resolve_individual_ids(_matchup('SINGLES', None), 1, _context())
        assert exc_info.value.side_number == 1
        assert str(exc_info.value) == 'Missing sideParticipant'

    def test_unknown_participant(self):
        with pytest.raises(MissingSideParticipant):
            resolve_individual_ids(_matchup('SINGLES', 'A', 'GHOST'), 2, _context())

    def test_missing_side(self):
        matchup = {'matchUpType': 'SINGLES', 'sides': [{'sideNumber': 1, 'participantId': 'A'}]}
        with pytest.raises(MissingSideParticipant):
            resolve_individual_ids(matchup, 2, _context())

    def test_no_sides(self):
        with pytest.raises(MissingSideParticipant):
            resolve_individual_ids({'matchUpType': 'SINGLES'}, 1, _context())


class TestFindPersonId:
    """Tests for person id lookup."""

    def test_linked_person(self):
        assert find_person_id('A', _context()) == 'P1'

    def test_no_person(self):
        assert find_person_id('B', _context()) is None

    def test_unknown_participant(self):
        assert find_person_id('GHOST', _context()) is None

    def test_absent_id(self):
        assert find_person_id(None, _context()) is None

"""Core module for tods2csv."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from tods_export.vocabulary import DEFAULT_TOURNAMENT_LEVEL


class ExportError(Exception):
    """Base class for errors raised while exporting matchUps."""


class MissingSideParticipant(ExportError):
    """A side of a matchUp could not be resolved to a participant."""

    def __init__(self, message: str = 'Missing sideParticipant', side_number: int | None = None):
        super().__init__(message)
        self.side_number = side_number


class EngineProcessingFailure(ExportError):
    """The tournament engine failed to enumerate the matchUps of a record."""


@dataclass
class ExportConfig:
    """Options of one export run."""

    source_dir: Path = Path('.')
    target_dir: Path = Path('.')
    count: Optional[int] = None
    tournament_id: Optional[str] = None
    organisation_id: Optional[str] = None
    progress: bool = True
    source_suffix: str = '.tods.json'
    tournament_level: str = DEFAULT_TOURNAMENT_LEVEL
    html: bool = False


@dataclass(frozen=True)
class ExportRow:
    """One exported matchUp. Field order is the column order of the CSV."""

    matchup_id: Optional[str]
    side1_player1_id: Optional[str]
    side1_player2_id: Optional[str]
    side2_player1_id: Optional[str]
    side2_player2_id: Optional[str]
    winning_side: Optional[int]
    score: Optional[str]
    matchup_status: Optional[str]
    matchup_type: Optional[str]
    tournament_name: Optional[str]
    tournament_id: Optional[str]
    matchup_format: Optional[str]
    matchup_start_date: Optional[str]
    tournament_start_date: Optional[str]
    tournament_end_date: Optional[str]
    age_category_code: Optional[str]
    tournament_level: Optional[str]
    gender: Optional[str]
    draw_id: Optional[str]
    round_number: Optional[int]
    round_position: Optional[int]


@dataclass
class ProcessingError:
    """A matchUp that could not be exported, with the reason."""

    error: str
    matchup: dict

    def to_dict(self) -> dict:
        return {'result': {'error': self.error}, 'matchUp': self.matchup}


@dataclass
class TournamentSummary:
    """Per-tournament diagnostics written to the details report."""

    matchups_count: int
    event_types: Optional[list[str]]
    tournament_name: Optional[str]
    filename: str

    def to_dict(self) -> dict:
        return {
            'matchUpsCount': self.matchups_count,
            'eventTypes': self.event_types,
            'tournamentName': self.tournament_name,
            'filename': self.filename,
        }


@dataclass
class BatchResult:
    """Everything accumulated over one batch run."""

    organisation_id: Optional[str] = None
    rows: list[ExportRow] = field(default_factory=list)
    errors: list[ProcessingError] = field(default_factory=list)
    summaries: list[TournamentSummary] = field(default_factory=list)
    tournaments_processed: int = 0
    failed_files: list[str] = field(default_factory=list)

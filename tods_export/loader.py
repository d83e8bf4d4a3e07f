"""Batch processing of a directory of TODS tournament files."""

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from rapidfuzz import fuzz, process

from tods_export import (
    BatchResult,
    ExportConfig,
    MissingSideParticipant,
    ProcessingError,
    TournamentSummary,
)
from tods_export.engine import TournamentContext, TournamentRecord, load_tournament
from tods_export.filtering import partition_matchups
from tods_export.rows import build_row

log = logging.getLogger(__name__)

DEFAULT_SOURCE_SUFFIX = '.tods.json'
SUGGESTION_CUTOFF = 60.0

Engine = Callable[[dict], TournamentContext]


def list_source_files(source_dir: str | Path) -> list[str]:
    """File names in a directory, in directory-listing order.

    Raises:
        FileNotFoundError: If the directory does not exist.
    """
    return [entry.name for entry in Path(source_dir).iterdir()]


def select_filenames(
    filenames: list[str],
    tournament_id: Optional[str] = None,
    suffix: str = DEFAULT_SOURCE_SUFFIX,
) -> list[str]:
    """Keep tournament files, optionally only those of one tournament.

    A file qualifies when ``suffix`` occurs after its first character and
    its last dot-separated segment is exactly ``json``.

    Args:
        filenames: Candidate names in listing order.
        tournament_id: Substring a name must contain.
        suffix: Source file suffix.

    Returns:
        Selected names, order preserved.
    """
    selected = [
        name for name in filenames
        if name.find(suffix) > 0 and name.split('.')[-1] == 'json'
    ]
    if tournament_id:
        selected = [name for name in selected if tournament_id in name]
    return selected


def suggest_filenames(
    tournament_id: str,
    filenames: list[str],
    limit: int = 3,
) -> list[str]:
    """File names most similar to a tournament id that matched nothing."""
    matches = process.extract(
        tournament_id,
        filenames,
        scorer=fuzz.partial_ratio,
        limit=limit,
        score_cutoff=SUGGESTION_CUTOFF,
    )
    return [choice for choice, _score, _index in matches]


def read_tournament(path: str | Path) -> dict:
    """Read one tournament record.

    Raises:
        ValueError: If the file is not valid JSON or not a JSON object.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8-sig') as f:
        record = json.load(f)
    if not isinstance(record, dict):
        raise ValueError(f"{path} enthaelt kein Turnier-Objekt.")
    return record


def _process_tournament(
    filename: str,
    record: dict,
    tournament: TournamentRecord,
    config: ExportConfig,
    result: BatchResult,
    engine: Engine,
) -> None:
    """Export the matchUps of one tournament into the batch result.

    Rows and errors are committed only when the whole file succeeded.
    """
    rows = []
    errors = []
    try:
        context = engine(record)
        exportable, excluded_statuses = partition_matchups(context.all_matchups())
        for matchup in exportable:
            try:
                rows.append(build_row(
                    matchup, tournament, context, config.tournament_level,
                ))
            except MissingSideParticipant as exc:
                errors.append(ProcessingError(error=str(exc), matchup=matchup))
    except Exception as exc:  # one broken tournament must not end the batch
        log.error("Verarbeitung von %s fehlgeschlagen: %s", filename, exc)
        result.failed_files.append(filename)
        return

    log.log(
        logging.DEBUG if config.progress else logging.INFO,
        "%s: nicht abgeschlossen: %s", filename, excluded_statuses,
    )
    result.rows.extend(rows)
    result.errors.extend(errors)
    result.summaries.append(TournamentSummary(
        matchups_count=len(exportable),
        event_types=tournament.event_types,
        tournament_name=tournament.name,
        filename=filename,
    ))


def run_batch(config: ExportConfig, engine: Engine = load_tournament) -> BatchResult:
    """Export all eligible tournament files of the source directory.

    Files are processed strictly one after another in listing order. The
    organisation of the batch is the configured one or, if absent, the one
    of the first tournament that has an organisation; tournaments of other
    organisations are skipped.

    Args:
        config: Export options.
        engine: Factory turning a tournament record into a query context.

    Returns:
        Accumulated rows, errors and per-tournament summaries.

    Raises:
        FileNotFoundError: If the source directory does not exist.
    """
    source_dir = Path(config.source_dir)
    all_files = select_filenames(
        list_source_files(source_dir), suffix=config.source_suffix,
    )
    count = config.count or len(all_files)
    candidates = all_files

    if config.tournament_id:
        candidates = select_filenames(
            all_files, config.tournament_id, suffix=config.source_suffix,
        )
        count = 1
        if not candidates:
            log.warning(
                "Keine Datei fuer Turnier %s gefunden. Aehnliche Dateien: %s",
                config.tournament_id,
                ', '.join(suggest_filenames(config.tournament_id, all_files)) or '-',
            )

    selected = candidates[:count]
    result = BatchResult(
        organisation_id=config.organisation_id,
        tournaments_processed=len(selected),
    )

    for index, filename in enumerate(selected, start=1):
        if config.progress:
            log.info("[%d/%d] %s", index, len(selected), filename)

        try:
            record = read_tournament(source_dir / filename)
        except (OSError, ValueError) as exc:
            log.warning("Datei %s uebersprungen: %s", filename, exc)
            result.failed_files.append(filename)
            continue

        tournament = TournamentRecord.from_dict(record)
        if not result.organisation_id:
            result.organisation_id = tournament.organisation_id
        if not result.organisation_id or tournament.organisation_id != result.organisation_id:
            continue

        _process_tournament(filename, record, tournament, config, result, engine)

    log.info(
        "Batch abgeschlossen: %d Zeilen aus %d Turnieren",
        len(result.rows), len(result.summaries),
    )
    return result

"""Export writers for batch results (CSV, JSON side reports, HTML, summary)."""

import csv
import json
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from tods_export import BatchResult, ExportRow, ProcessingError, TournamentSummary

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

CSV_COLUMNS = [
    'MatchUpID',
    'Side1Player1ID',
    'Side1Player2ID',
    'Side2Player1ID',
    'Side2Player2ID',
    'WinningSide',
    'Score',
    'MatchUpStatus',
    'MatchUpType',
    'TournamentName',
    'TournamentID',
    'MatchUpFormat',
    'MatchUpStartDate',
    'TournamentStartDate',
    'TournamentEndDate',
    'AgeCategoryCode',
    'TournamentLevel',
    'Gender',
    'DrawId',
    'RoundNumber',
    'RoundPosition',
]


def _row_to_dict(row: ExportRow) -> dict:
    """Convert an ExportRow to a dict keyed by CSV column."""
    return {
        'MatchUpID': row.matchup_id,
        'Side1Player1ID': row.side1_player1_id,
        'Side1Player2ID': row.side1_player2_id,
        'Side2Player1ID': row.side2_player1_id,
        'Side2Player2ID': row.side2_player2_id,
        'WinningSide': row.winning_side,
        'Score': row.score,
        'MatchUpStatus': row.matchup_status,
        'MatchUpType': row.matchup_type,
        'TournamentName': row.tournament_name,
        'TournamentID': row.tournament_id,
        'MatchUpFormat': row.matchup_format,
        'MatchUpStartDate': row.matchup_start_date,
        'TournamentStartDate': row.tournament_start_date,
        'TournamentEndDate': row.tournament_end_date,
        'AgeCategoryCode': row.age_category_code,
        'TournamentLevel': row.tournament_level,
        'Gender': row.gender,
        'DrawId': row.draw_id,
        'RoundNumber': row.round_number,
        'RoundPosition': row.round_position,
    }


def write_csv_export(rows: list[ExportRow], output_path: Path) -> None:
    """Write export rows as CSV.

    Comma delimiter, CRLF line endings and double-quote escaping. Absent
    values are written as empty fields.

    Args:
        rows: Rows to write.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(
            f, fieldnames=CSV_COLUMNS, delimiter=',', lineterminator='\r\n',
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(_row_to_dict(row))

    log.info("CSV-Export geschrieben: %s (%d Zeilen)", output_path, len(rows))


def _write_json(data: list, output_path: Path) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_errors_report(errors: list[ProcessingError], output_path: Path) -> None:
    """Write the matchUps that could not be exported as JSON."""
    _write_json([e.to_dict() for e in errors], output_path)
    log.info("Fehler-Report geschrieben: %s (%d Eintraege)", output_path, len(errors))


def write_details_report(
    summaries: list[TournamentSummary],
    output_path: Path,
) -> None:
    """Write the per-tournament details as JSON."""
    _write_json([s.to_dict() for s in summaries], output_path)
    log.info("Detail-Report geschrieben: %s", output_path)


def _compute_stats(result: BatchResult) -> dict:
    """Compute batch totals."""
    return {
        'exported': len(result.rows),
        'errors': len(result.errors),
        'tournaments': result.tournaments_processed,
        'exported_tournaments': len(result.summaries),
        'failed_files': len(result.failed_files),
        'completed_matchups': sum(s.matchups_count for s in result.summaries),
    }


def write_html_report(result: BatchResult, output_path: Path) -> None:
    """Write the per-tournament details as an HTML report using Jinja2.

    Args:
        result: Batch result.
        output_path: Path for the output HTML file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('details.html')

    html = template.render(
        organisation_id=result.organisation_id,
        summaries=[s.to_dict() for s in result.summaries],
        failed_files=result.failed_files,
        stats=_compute_stats(result),
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML-Report geschrieben: %s", output_path)


def export_batch(
    result: BatchResult,
    target_dir: Path,
    html: bool = False,
) -> list[Path]:
    """Write all non-empty artifacts of a batch, named by organisation.

    Args:
        result: Batch result.
        target_dir: Output directory.
        html: Also write the HTML details report.

    Returns:
        Paths of the written files.
    """
    target_dir = Path(target_dir)
    prefix = result.organisation_id
    written: list[Path] = []

    if prefix and result.rows:
        path = target_dir / f'{prefix}.csv'
        write_csv_export(result.rows, path)
        written.append(path)

    if result.errors:
        path = target_dir / f'{prefix}.errors.json'
        write_errors_report(result.errors, path)
        written.append(path)

    if result.summaries:
        path = target_dir / f'{prefix}.details.json'
        write_details_report(result.summaries, path)
        written.append(path)

        if html:
            path = target_dir / f'{prefix}.details.html'
            write_html_report(result, path)
            written.append(path)

    if not written:
        log.warning("Keine Ausgabedateien geschrieben.")
    return written


def print_summary(result: BatchResult) -> None:
    """Print the batch totals to stdout."""
    stats = _compute_stats(result)

    print(f"\n=== Export: {result.organisation_id or '-'} ===")
    print(f"Exportierte MatchUps:      {stats['exported']:>5}")
    print(f"Fehler gesamt:             {stats['errors']:>5}")
    print(f"Turniere verarbeitet:      {stats['tournaments']:>5}")
    print(f"  - exportiert:            {stats['exported_tournaments']:>5}")
    print(f"  - fehlgeschlagen:        {stats['failed_files']:>5}")
    print()

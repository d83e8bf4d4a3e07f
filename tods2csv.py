"""tods2csv – CLI-Tool zum Export abgeschlossener MatchUps aus TODS-Dateien als CSV."""

import argparse
import logging
from pathlib import Path

from tods_export import ExportConfig
from tods_export.loader import DEFAULT_SOURCE_SUFFIX, run_batch
from tods_export.reporter import export_batch, print_summary
from tods_export.vocabulary import DEFAULT_TOURNAMENT_LEVEL


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Export abgeschlossener Einzel- und Doppel-MatchUps aus '
                    'TODS-Turnierdateien in eine CSV-Datei pro Organisation.',
        prog='tods2csv.py',
    )
    parser.add_argument(
        '--source-dir', type=Path, default=Path('.'),
        help='Verzeichnis mit den *.tods.json-Dateien (Standard: .)',
    )
    parser.add_argument(
        '--target-dir', type=Path, default=Path('.'),
        help='Verzeichnis fuer die Ausgabedateien (Standard: .)',
    )
    parser.add_argument(
        '--count', type=int,
        help='Maximale Anzahl zu verarbeitender Turnierdateien',
    )
    parser.add_argument(
        '--tournament-id',
        help='Nur die Datei dieses Turniers verarbeiten',
    )
    parser.add_argument(
        '--organisation-id',
        help='Organisation vorgeben statt sie aus der ersten Datei zu uebernehmen',
    )
    parser.add_argument(
        '--source-suffix', default=DEFAULT_SOURCE_SUFFIX,
        help=f'Dateiendung der Quelldateien (Standard: {DEFAULT_SOURCE_SUFFIX})',
    )
    parser.add_argument(
        '--tournament-level', default=DEFAULT_TOURNAMENT_LEVEL,
        help=f'Turnier-Level in jeder Zeile (Standard: {DEFAULT_TOURNAMENT_LEVEL})',
    )
    parser.add_argument(
        '--no-progress', action='store_true',
        help='Keine Fortschrittsanzeige, stattdessen Status-Diagnose je Turnier',
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Zusaetzlich einen HTML-Detail-Report erzeugen',
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Debug-Ausgaben aktivieren',
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ExportConfig:
    """Collect parsed CLI options into an ExportConfig."""
    return ExportConfig(
        source_dir=args.source_dir,
        target_dir=args.target_dir,
        count=args.count,
        tournament_id=args.tournament_id,
        organisation_id=args.organisation_id,
        progress=not args.no_progress,
        source_suffix=args.source_suffix,
        tournament_level=args.tournament_level,
        html=args.html,
    )


def main() -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    if args.count is not None and args.count < 0:
        parser.error('--count darf nicht negativ sein.')

    config = config_from_args(args)
    try:
        result = run_batch(config)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.error(f'Quellverzeichnis nicht lesbar: {exc}')

    export_batch(result, config.target_dir, html=config.html)
    print_summary(result)


if __name__ == '__main__':
    main()

"""Selection of exportable matchUps."""

from tods_export.vocabulary import COMPLETED_STATUSES, EXPORTABLE_TYPES


def is_exportable(matchup: dict) -> bool:
    """Completed SINGLES or DOUBLES matchUp."""
    return (
        matchup.get('matchUpStatus') in COMPLETED_STATUSES
        and matchup.get('matchUpType') in EXPORTABLE_TYPES
    )


def partition_matchups(matchups: list[dict]) -> tuple[list[dict], list[str]]:
    """Split matchUps into exportable ones and excluded statuses.

    Completed matchUps of other types (TEAM) are dropped without being
    reported.

    Args:
        matchups: All matchUps of one tournament.

    Returns:
        Tuple of the exportable matchUps (input order) and the distinct
        statuses of all matchUps that are not completed (first seen first).
    """
    exportable: list[dict] = []
    excluded_statuses: list[str] = []
    for matchup in matchups:
        status = matchup.get('matchUpStatus')
        if status not in COMPLETED_STATUSES:
            if status not in excluded_statuses:
                excluded_statuses.append(status)
            continue
        if matchup.get('matchUpType') in EXPORTABLE_TYPES:
            exportable.append(matchup)
    return exportable, excluded_statuses

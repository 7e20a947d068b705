"""
Kanban board projection.
Groups active installations into one column per catalog entry of the chosen track.
"""
from typing import Dict, List, Optional

from solarview.board.schemas import Board, BoardColumn
from solarview.catalog.schemas import StatusConfig
from solarview.core.exceptions import InvalidInputError
from solarview.installations.schemas import Installation
from solarview.workflow.tracks import Track, get_track_handler

COLUMN_TITLES: Dict[str, str] = {
    "Enviado para Análise": "Em Análise",
}


def project_board(
    installations: List[Installation],
    track: Track,
    catalog: StatusConfig
) -> Dict[str, List[Installation]]:
    """
    Returns status -> installations, in catalog order, excluding archived installations.
    Values missing from the catalog (e.g. a deleted label) get trailing columns so that every
    active installation lands in exactly one column. Within a column, store order is kept.
    """
    handler = get_track_handler(track)
    columns: Dict[str, List[Installation]] = {status: [] for status in handler.columns(catalog)}

    for inst in installations:
        if inst.archived:
            continue
        columns.setdefault(handler.display(inst), []).append(inst)

    return columns


def build_board(installations: List[Installation], track: Track, catalog: StatusConfig) -> Board:
    handler = get_track_handler(track)
    known = set(handler.columns(catalog))
    return Board(
        track=handler.track,
        label=handler.label,
        columns=[
            BoardColumn(
                id=status,
                title=COLUMN_TITLES.get(status, status),
                installations=members,
                orphan=status not in known,
            )
            for status, members in project_board(installations, track, catalog).items()
        ],
    )


def resolve_drop_target(
    track: Track,
    column_id: Optional[str] = None,
    over_installation: Optional[Installation] = None
) -> str:
    """
    Maps a drop to the status it stands for: a column id, or the current status of the card
    the dragged card was dropped on.
    """
    if over_installation is not None:
        return get_track_handler(track).display(over_installation)
    if column_id:
        return column_id
    raise InvalidInputError("Drop target must be a column or another installation")

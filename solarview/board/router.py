"""
FastAPI Router for Kanban boards and drag-and-drop moves.
"""
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header

from solarview.board.schemas import Board, MoveRequest
from solarview.board.service import build_board, resolve_drop_target
from solarview.catalog.service import StatusCatalog
from solarview.core.dependencies import get_installation_repository, get_status_catalog
from solarview.core.exceptions import InvalidInputError, NotFoundError
from solarview.core.logger import audit_log, get_logger_with_correlation
from solarview.installations.repository import InstallationRepository
from solarview.installations.schemas import Installation
from solarview.workflow.engine import WorkflowEngine, get_workflow_engine
from solarview.workflow.tracks import Track

router = APIRouter(tags=["Board"])


@router.get("/{track}", response_model=Board)
def read_board(
    track: Track,
    repository: InstallationRepository = Depends(get_installation_repository),
    catalog: StatusCatalog = Depends(get_status_catalog)
) -> Board:
    """Kanban columns for one track. Archived installations are left out."""
    return build_board(repository.load(), track, catalog.load())


@router.post("/{track}/move", response_model=Installation)
def move_card(
    track: Track,
    data: MoveRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    catalog: StatusCatalog = Depends(get_status_catalog),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    """
    **Drag and drop**

    Dropping a card on a column, or on a card of that column, is a status transition.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        installation = repository.find(data.installation_id)
        over = repository.find(data.over_installation_id) if data.over_installation_id is not None else None
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        target = resolve_drop_target(track, column_id=data.column_id, over_installation=over)
        updated = engine.transition(installation, track, target, catalog=catalog.load())
    except InvalidInputError as e:
        logger.warning(f"Move rejected: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    if updated is not installation:
        repository.replace(updated)
        audit_log(
            action="card_moved",
            user="admin",
            resource=f"installation_id={updated.id}",
            details={"correlation_id": correlation_id, "track": track.value, "target": target}
        )
    return updated

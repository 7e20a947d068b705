"""
FastAPI Router for workflow actions on a single installation.
Every action is a read-modify-write: load the record, run the engine, replace the record.
"""
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header

from solarview.catalog.service import StatusCatalog
from solarview.core.dependencies import get_installation_repository, get_status_catalog
from solarview.core.exceptions import InvalidInputError, NotFoundError
from solarview.core.logger import audit_log, get_logger_with_correlation
from solarview.installations.repository import InstallationRepository
from solarview.installations.schemas import Installation
from solarview.workflow.engine import WorkflowEngine, get_workflow_engine
from solarview.workflow.schemas import (
    DocumentUploadRequest,
    ManualEventRequest,
    ProtocolUpdateRequest,
    ScheduleRequest,
    TransitionRequest,
)

router = APIRouter(tags=["Workflow"])


def _load(repository: InstallationRepository, installation_id: int) -> Installation:
    try:
        return repository.find(installation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _persist(
    repository: InstallationRepository,
    before: Installation,
    after: Installation,
    action: str,
    correlation_id: str,
    **details
) -> Installation:
    if after is before:
        return after
    repository.replace(after)
    audit_log(
        action=action,
        user="admin",
        resource=f"installation_id={after.id}",
        details={"correlation_id": correlation_id, **details}
    )
    return after


@router.post("/{installation_id}/transition", response_model=Installation)
def transition_status(
    installation_id: int,
    data: TransitionRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    catalog: StatusCatalog = Depends(get_status_catalog),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    """
    **Status change**

    Moves one status track. Selecting the current value is a no-op.
    Moving the installation track to "Agendado" without a date auto-schedules the visit.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)
    installation = _load(repository, installation_id)

    try:
        updated = engine.transition(installation, data.track, data.value, catalog=catalog.load())
    except InvalidInputError as e:
        logger.warning(f"Transition rejected: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    return _persist(
        repository, installation, updated, "status_transition", correlation_id,
        track=data.track.value, value=data.value
    )


@router.post("/{installation_id}/schedule", response_model=Installation)
def schedule_installation(
    installation_id: int,
    data: ScheduleRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    """
    **Agendar Instalação**

    Requires an approved project. Always sets status to "Agendado".
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)
    installation = _load(repository, installation_id)

    try:
        updated = engine.schedule_installation(installation, data.date, data.time, data.notes)
    except InvalidInputError as e:
        logger.warning(f"Scheduling rejected: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    return _persist(
        repository, installation, updated, "installation_scheduled", correlation_id,
        scheduled_date=updated.scheduled_date
    )


@router.post("/{installation_id}/events", response_model=Installation, status_code=201)
def add_event(
    installation_id: int,
    data: ManualEventRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    """Records a manual timeline event. Future dates are rejected."""
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)
    installation = _load(repository, installation_id)

    try:
        updated = engine.record_manual_event(
            installation, data.type, data.description, data.date, data.attachments
        )
    except InvalidInputError as e:
        logger.warning(f"Event rejected: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    return _persist(
        repository, installation, updated, "event_recorded", correlation_id,
        type=data.type
    )


@router.put("/{installation_id}/protocol", response_model=Installation)
def update_protocol(
    installation_id: int,
    data: ProtocolUpdateRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    correlation_id = x_correlation_id or str(uuid4())
    installation = _load(repository, installation_id)
    updated = engine.update_protocol_number(installation, data.protocol_number)
    return _persist(
        repository, installation, updated, "protocol_updated", correlation_id,
        protocol_number=updated.protocol_number
    )


@router.post("/{installation_id}/archive", response_model=Installation)
def toggle_archive(
    installation_id: int,
    repository: InstallationRepository = Depends(get_installation_repository),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    """Archives or restores the installation. Archived installations leave the boards."""
    correlation_id = x_correlation_id or str(uuid4())
    installation = _load(repository, installation_id)
    updated = engine.toggle_archive(installation)
    return _persist(
        repository, installation, updated, "installation_archive_toggled", correlation_id,
        archived=updated.archived
    )


@router.post("/{installation_id}/documents", response_model=Installation, status_code=201)
def upload_document(
    installation_id: int,
    data: DocumentUploadRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    correlation_id = x_correlation_id or str(uuid4())
    installation = _load(repository, installation_id)
    updated = engine.attach_document(installation, data.name, data.data_url, data.type)
    return _persist(
        repository, installation, updated, "document_attached", correlation_id,
        name=data.name
    )

"""
FastAPI Router for installation records (table view, registration, edits).
Status changes go through the workflow endpoints instead.
"""
from typing import List
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header

from solarview.catalog.service import StatusCatalog
from solarview.clients.service import ClientService
from solarview.core.dependencies import (
    get_client_service,
    get_installation_repository,
    get_status_catalog,
)
from solarview.core.exceptions import NotFoundError
from solarview.core.logger import audit_log, get_logger_with_correlation
from solarview.installations.repository import InstallationRepository
from solarview.installations.schemas import (
    Installation,
    InstallationCreate,
    InstallationFilters,
    InstallationUpdate,
)
from solarview.installations.service import (
    create_installation,
    delete_installation,
    search_installations,
    update_installation,
)
from solarview.workflow.engine import WorkflowEngine, get_workflow_engine

router = APIRouter(tags=["Installations"])


@router.get("/", response_model=List[Installation])
def list_installations(
    filters: InstallationFilters = Depends(),
    repository: InstallationRepository = Depends(get_installation_repository)
) -> List[Installation]:
    """
    Table view. Archived installations are included unless filtered out.

    - **search**: matches client name or city (case-insensitive)
    - **status / project_status / homologation_status / installation_type / archived**: exact match
    """
    return search_installations(repository.load(), filters)


@router.post("/", response_model=Installation, status_code=201)
def register_installation(
    data: InstallationCreate,
    repository: InstallationRepository = Depends(get_installation_repository),
    clients: ClientService = Depends(get_client_service),
    catalog: StatusCatalog = Depends(get_status_catalog),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    """
    **Nova Instalação**

    Creates the record for an existing client. Equipment is added later.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        client = clients.find(data.client_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    installation = create_installation(repository, engine, client, data, catalog.load())

    audit_log(
        action="installation_created",
        user="admin",
        resource=f"installation_id={installation.id}",
        details={"correlation_id": correlation_id, "client_id": client.id}
    )
    logger.info(f"Installation registered: {installation.installation_id}")
    return installation


@router.get("/{installation_id}", response_model=Installation)
def get_installation(
    installation_id: int,
    repository: InstallationRepository = Depends(get_installation_repository)
) -> Installation:
    try:
        return repository.find(installation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{installation_id}", response_model=Installation)
def edit_installation(
    installation_id: int,
    data: InstallationUpdate,
    repository: InstallationRepository = Depends(get_installation_repository),
    x_correlation_id: str = Header(default=None)
) -> Installation:
    correlation_id = x_correlation_id or str(uuid4())
    try:
        installation = update_installation(repository, installation_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    audit_log(
        action="installation_updated",
        user="admin",
        resource=f"installation_id={installation_id}",
        details={"correlation_id": correlation_id, "fields": sorted(data.model_dump(exclude_unset=True))}
    )
    return installation


@router.delete("/{installation_id}", status_code=204)
def remove_installation(
    installation_id: int,
    repository: InstallationRepository = Depends(get_installation_repository),
    x_correlation_id: str = Header(default=None)
):
    correlation_id = x_correlation_id or str(uuid4())
    try:
        removed = delete_installation(repository, installation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    audit_log(
        action="installation_deleted",
        user="admin",
        resource=f"installation_id={installation_id}",
        details={"correlation_id": correlation_id, "client_name": removed.client_name}
    )
    return

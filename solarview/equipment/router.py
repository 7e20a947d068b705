"""
FastAPI Router for equipment inventory, serial number search and inverter transfers.
"""
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header, Query

from solarview.core.dependencies import get_installation_repository
from solarview.core.exceptions import InvalidInputError, NotFoundError
from solarview.core.logger import audit_log, get_logger_with_correlation
from solarview.equipment.schemas import (
    EquipmentInventory,
    InverterLocation,
    TransferRequest,
    TransferResponse,
)
from solarview.equipment.service import inventory, locate_inverter
from solarview.installations.repository import InstallationRepository
from solarview.workflow.engine import WorkflowEngine, get_workflow_engine

router = APIRouter(tags=["Equipment"])


@router.get("/", response_model=EquipmentInventory)
def list_equipment(
    repository: InstallationRepository = Depends(get_installation_repository)
) -> EquipmentInventory:
    return inventory(repository.load())


@router.get("/search", response_model=InverterLocation)
def search_by_serial(
    serial: str = Query(..., min_length=1, description="Nº de série do inversor"),
    repository: InstallationRepository = Depends(get_installation_repository)
) -> InverterLocation:
    try:
        return locate_inverter(repository.load(), serial)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/transfer", response_model=TransferResponse)
def transfer_inverter(
    data: TransferRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    engine: WorkflowEngine = Depends(get_workflow_engine),
    x_correlation_id: str = Header(default=None)
) -> TransferResponse:
    """
    **Transferir Equipamento**

    Moves an inverter to another installation. Both records are written together.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        source = repository.find(data.source_installation_id)
        destination = repository.find(data.destination_installation_id)
        updated_source, updated_destination = engine.transfer_equipment(source, destination, data.inverter_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        logger.warning(f"Transfer rejected: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    repository.replace(updated_source, updated_destination)

    audit_log(
        action="inverter_transferred",
        user="admin",
        resource=f"inverter_id={data.inverter_id}",
        details={
            "correlation_id": correlation_id,
            "source_installation_id": source.id,
            "destination_installation_id": destination.id,
        }
    )
    return TransferResponse(
        source_installation_id=updated_source.id,
        destination_installation_id=updated_destination.id,
        source_inverter_count=len(updated_source.inverters),
        destination_inverter_count=len(updated_destination.inverters),
    )

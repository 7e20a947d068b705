"""
Business logic for installation records outside the status workflow:
registration, descriptive edits, deletion and table filtering.
"""
from typing import List

from solarview.catalog.schemas import DEFAULT_STATUS_CONFIG, StatusConfig
from solarview.clients.schemas import Client
from solarview.core.logger import logger
from solarview.installations.repository import InstallationRepository
from solarview.installations.schemas import (
    EventType,
    Installation,
    InstallationCreate,
    InstallationFilters,
    InstallationUpdate,
)
from solarview.storage.store import report_key
from solarview.workflow.engine import WorkflowEngine


def format_installation_code(installation_id: int) -> str:
    return f"INST-{installation_id:03d}"


def _first_or_default(labels: List[str], category: str) -> str:
    return labels[0] if labels else DEFAULT_STATUS_CONFIG[category][0]


def create_installation(
    repository: InstallationRepository,
    engine: WorkflowEngine,
    client: Client,
    data: InstallationCreate,
    catalog: StatusConfig
) -> Installation:
    """
    Registers a new installation for a client.
    Address fields are copied from the client unless overridden. Statuses start at the first
    catalog entry of each track. A protocol number given at creation opens the timeline.
    """
    next_id = repository.next_id()
    protocol_number = (data.protocol_number or "").strip() or None

    events = []
    if protocol_number:
        events.append(engine.make_event(
            EventType.PROTOCOL.value,
            f"Protocolo {protocol_number} aberto na {data.utility_company}."
        ))

    installation = Installation(
        id=next_id,
        installation_id=format_installation_code(next_id),
        client_id=client.id,
        client_name=client.name,
        address=data.address or client.address,
        city=data.city or client.city,
        state=data.state or client.state,
        zip_code=data.zip_code or client.zip_code,
        installation_type=data.installation_type,
        utility_company=data.utility_company,
        protocol_number=protocol_number,
        protocol_date=engine.now() if protocol_number else None,
        status=_first_or_default(catalog.installation, "installation"),
        project_status=_first_or_default(catalog.project, "project"),
        homologation_status=_first_or_default(catalog.homologation, "homologation"),
        events=events,
    )
    repository.add(installation)
    logger.info(f"Installation created: id={installation.id}, code={installation.installation_id}")
    return installation


def update_installation(
    repository: InstallationRepository,
    installation_id: int,
    data: InstallationUpdate
) -> Installation:
    installation = repository.find(installation_id)
    updated = Installation.model_validate({
        **installation.model_dump(),
        **data.model_dump(exclude_unset=True, exclude_none=True),
    })
    repository.replace(updated)
    return updated


def delete_installation(repository: InstallationRepository, installation_id: int) -> Installation:
    """Removes the record together with the client's installer report."""
    removed = repository.remove(installation_id)
    repository.store.delete(report_key(removed.client_name))
    repository.set_report_flag(removed.client_name, False)
    logger.info(f"Installation deleted: id={installation_id}")
    return removed


def search_installations(installations: List[Installation], filters: InstallationFilters) -> List[Installation]:
    """Case-insensitive match on client name or city, plus exact-value column filters."""
    result = list(installations)

    if filters.search:
        query = filters.search.lower()
        result = [
            inst for inst in result
            if query in inst.client_name.lower() or query in inst.city.lower()
        ]

    exact = filters.model_dump(exclude={"search"}, exclude_none=True)
    for field, expected in exact.items():
        result = [inst for inst in result if getattr(inst, field) == expected]

    return result

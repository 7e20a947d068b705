"""
FastAPI Router for client management.
"""
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header

from solarview.clients.schemas import Client, ClientData, ClientListResponse
from solarview.clients.service import ClientService, summarize_clients
from solarview.core.dependencies import get_client_service, get_installation_repository
from solarview.core.exceptions import NotFoundError
from solarview.core.logger import audit_log
from solarview.installations.repository import InstallationRepository

router = APIRouter(tags=["Clients"])


@router.get("/", response_model=ClientListResponse)
def list_clients(
    search: str = None,
    clients: ClientService = Depends(get_client_service),
    repository: InstallationRepository = Depends(get_installation_repository)
) -> ClientListResponse:
    """Clients with their installation count. `search` matches name, document or city."""
    all_clients = clients.load()
    if search:
        query = search.lower()
        all_clients = [
            c for c in all_clients
            if query in c.name.lower() or query in c.document.lower() or query in c.city.lower()
        ]
    summaries = summarize_clients(all_clients, repository.load())
    return ClientListResponse(total=len(summaries), clients=summaries)


@router.post("/", response_model=Client, status_code=201)
def create_client(
    data: ClientData,
    clients: ClientService = Depends(get_client_service),
    x_correlation_id: str = Header(default=None)
) -> Client:
    client = clients.create(data)
    audit_log(
        action="client_created",
        user="admin",
        resource=f"client_id={client.id}",
        details={"correlation_id": x_correlation_id or str(uuid4())}
    )
    return client


@router.get("/{client_id}", response_model=Client)
def get_client(client_id: int, clients: ClientService = Depends(get_client_service)) -> Client:
    try:
        return clients.find(client_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{client_id}", response_model=Client)
def update_client(
    client_id: int,
    data: ClientData,
    clients: ClientService = Depends(get_client_service),
    x_correlation_id: str = Header(default=None)
) -> Client:
    try:
        client = clients.update(client_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    audit_log(
        action="client_updated",
        user="admin",
        resource=f"client_id={client_id}",
        details={"correlation_id": x_correlation_id or str(uuid4())}
    )
    return client


@router.delete("/{client_id}", status_code=204)
def delete_client(
    client_id: int,
    clients: ClientService = Depends(get_client_service),
    x_correlation_id: str = Header(default=None)
):
    try:
        clients.delete(client_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    audit_log(
        action="client_deleted",
        user="admin",
        resource=f"client_id={client_id}",
        details={"correlation_id": x_correlation_id or str(uuid4())}
    )
    return

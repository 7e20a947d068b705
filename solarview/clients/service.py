"""
Business logic for clients.
Installations copy the client's address at creation time; later client edits are not propagated.
"""
from collections import Counter
from typing import List

from solarview.clients.schemas import Client, ClientData, ClientSummary
from solarview.core.exceptions import NotFoundError
from solarview.core.logger import logger
from solarview.installations.schemas import Installation
from solarview.storage.store import CLIENTS_KEY, DocumentStore


class ClientService:

    def __init__(self, store: DocumentStore):
        self.store = store

    def load(self) -> List[Client]:
        return [Client.model_validate(item) for item in self.store.load(CLIENTS_KEY, [])]

    def save_all(self, clients: List[Client]) -> None:
        self.store.save(CLIENTS_KEY, [client.to_document() for client in clients])

    def find(self, client_id: int) -> Client:
        for client in self.load():
            if client.id == client_id:
                return client
        raise NotFoundError(f"Client {client_id} not found")

    def create(self, data: ClientData) -> Client:
        clients = self.load()
        next_id = max((c.id for c in clients), default=0) + 1
        client = Client(id=next_id, **data.model_dump())
        clients.append(client)
        self.save_all(clients)
        logger.info(f"Client created: id={client.id}")
        return client

    def update(self, client_id: int, data: ClientData) -> Client:
        clients = self.load()
        for position, existing in enumerate(clients):
            if existing.id == client_id:
                clients[position] = Client(id=client_id, **data.model_dump())
                self.save_all(clients)
                logger.info(f"Client updated: id={client_id}")
                return clients[position]
        raise NotFoundError(f"Client {client_id} not found")

    def delete(self, client_id: int) -> Client:
        """Installations of the client are kept as they are."""
        clients = self.load()
        removed = next((c for c in clients if c.id == client_id), None)
        if removed is None:
            raise NotFoundError(f"Client {client_id} not found")
        self.save_all([c for c in clients if c.id != client_id])
        logger.info(f"Client deleted: id={client_id}")
        return removed


def summarize_clients(clients: List[Client], installations: List[Installation]) -> List[ClientSummary]:
    counts = Counter(inst.client_id for inst in installations)
    return [
        ClientSummary(**client.model_dump(), installation_count=counts.get(client.id, 0))
        for client in clients
    ]

"""
Request-scoped providers for the store-bound services.
Tests swap the document store through app.dependency_overrides[get_document_store].
"""
from fastapi import Depends

from solarview.catalog.service import StatusCatalog
from solarview.clients.service import ClientService
from solarview.installations.repository import InstallationRepository
from solarview.storage.store import DocumentStore, get_document_store


def get_status_catalog(store: DocumentStore = Depends(get_document_store)) -> StatusCatalog:
    return StatusCatalog(store)


def get_installation_repository(store: DocumentStore = Depends(get_document_store)) -> InstallationRepository:
    return InstallationRepository(store)


def get_client_service(store: DocumentStore = Depends(get_document_store)) -> ClientService:
    return ClientService(store)

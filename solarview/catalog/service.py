"""
Business logic for the status catalog.
Edits never cascade to installations already holding a renamed or deleted label.
"""
from typing import List

from solarview.catalog.schemas import StatusCategory, StatusConfig
from solarview.core.exceptions import InvalidInputError
from solarview.core.logger import logger
from solarview.storage.store import STATUS_CONFIG_KEY, DocumentStore


class StatusCatalog:
    """Reads and edits the statusConfig document. Every edit is a full read-modify-write."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def load(self) -> StatusConfig:
        raw = self.store.load(STATUS_CONFIG_KEY)
        if not raw:
            return StatusConfig()
        return StatusConfig(**raw)

    def save(self, config: StatusConfig) -> StatusConfig:
        self.store.save(STATUS_CONFIG_KEY, config.model_dump())
        return config

    def list_statuses(self, category: StatusCategory) -> List[str]:
        return list(self.load().statuses(category))

    def _write(self, category: StatusCategory, labels: List[str]) -> List[str]:
        config = self.load().model_copy(update={category.value: labels})
        self.save(config)
        return labels

    def add_status(self, category: StatusCategory, label: str) -> List[str]:
        labels = self.list_statuses(category)
        if not label or not label.strip():
            raise InvalidInputError("Status label cannot be empty")
        if label in labels:
            raise InvalidInputError(f'Status "{label}" already exists')
        labels.append(label)
        logger.info(f"Status added: category={category.value}, label={label}")
        return self._write(category, labels)

    def rename_status(self, category: StatusCategory, old: str, new: str) -> List[str]:
        labels = self.list_statuses(category)
        if old not in labels:
            raise InvalidInputError(f'Status "{old}" not found')
        if not new or not new.strip():
            raise InvalidInputError("Status label cannot be empty")
        if new in labels:
            raise InvalidInputError(f'Status "{new}" already exists')
        labels[labels.index(old)] = new
        logger.info(f"Status renamed: category={category.value}, {old} -> {new}")
        return self._write(category, labels)

    def delete_status(self, category: StatusCategory, label: str) -> List[str]:
        labels = self.list_statuses(category)
        if label not in labels:
            raise InvalidInputError(f'Status "{label}" not found')
        labels.remove(label)
        logger.info(f"Status deleted: category={category.value}, label={label}")
        return self._write(category, labels)

    def reorder(self, category: StatusCategory, new_order: List[str]) -> List[str]:
        labels = self.list_statuses(category)
        if len(new_order) != len(labels) or set(new_order) != set(labels):
            raise InvalidInputError("New order must be a permutation of the current statuses")
        return self._write(category, list(new_order))

    def replace_config(self, config: StatusConfig) -> StatusConfig:
        logger.info("Status catalog replaced")
        return self.save(config)

"""
Document store abstraction.
Callers read a whole collection, modify it and write it back: there is no partial update
and no concurrency token, matching the single-writer model of the panel.
"""
import copy
import json
from typing import Any, Dict, List

from fastapi import Depends
from sqlalchemy.orm import Session

from solarview.core.database import get_db
from solarview.core.exceptions import StorageError
from solarview.core.logger import logger
from solarview.storage.models import StoredDocument

INSTALLATIONS_KEY = "installations"
CLIENTS_KEY = "clients"
STATUS_CONFIG_KEY = "statusConfig"
REPORT_KEY_PREFIX = "report_"


def report_key(client_name: str) -> str:
    """Installer reports are keyed by the client's name."""
    return f"{REPORT_KEY_PREFIX}{client_name}"


class DocumentStore:
    """Interface for keyed JSON documents. Enforces the Strategy Pattern for storage backends."""

    def load(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def keys(self, prefix: str = "") -> List[str]:
        raise NotImplementedError


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store used by tests and scripts. Values are deep-copied on the way in and out."""

    def __init__(self, initial: Dict[str, Any] = None):
        self._documents: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._documents:
            return default
        return copy.deepcopy(self._documents[key])

    def save(self, key: str, value: Any) -> None:
        self._documents[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._documents.pop(key, None)

    def exists(self, key: str) -> bool:
        return key in self._documents

    def keys(self, prefix: str = "") -> List[str]:
        return [k for k in self._documents if k.startswith(prefix)]


class SqlDocumentStore(DocumentStore):
    """SQLAlchemy-backed store. Each save commits immediately."""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, key: str) -> StoredDocument:
        return self.db.query(StoredDocument).filter(StoredDocument.key == key).first()

    def load(self, key: str, default: Any = None) -> Any:
        """Decoded document, or default when the key is absent. Unreadable JSON raises StorageError."""
        document = self._get(key)
        if not document:
            return default
        try:
            return json.loads(document.payload)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted document: key={key}, error={str(e)}")
            raise StorageError(f"Document {key} is corrupted and cannot be read") from e

    def save(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        document = self._get(key)
        if document:
            document.payload = payload
        else:
            self.db.add(StoredDocument(key=key, payload=payload))
        self.db.commit()

    def delete(self, key: str) -> None:
        document = self._get(key)
        if document:
            self.db.delete(document)
            self.db.commit()

    def exists(self, key: str) -> bool:
        return self._get(key) is not None

    def keys(self, prefix: str = "") -> List[str]:
        rows = self.db.query(StoredDocument.key).filter(StoredDocument.key.startswith(prefix, autoescape=True)).all()
        return [row[0] for row in rows]


def get_document_store(db: Session = Depends(get_db)) -> DocumentStore:
    """Request-scoped store bound to the request's database session."""
    return SqlDocumentStore(db)

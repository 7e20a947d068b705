"""
Pydantic schemas for installation records and their nested entities.
Persisted JSON keeps camelCase field names; Python code works with snake_case attributes.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from solarview.catalog.schemas import DEFAULT_STATUS_CONFIG
from solarview.core.utils import ensure_aware


class DocumentModel(BaseModel):
    """Base for everything stored in the document store."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class InstallationType(str, Enum):
    RESIDENTIAL = "residencial"
    COMMERCIAL = "comercial"


class EventType(str, Enum):
    """Fixed vocabulary of timeline entries. Free-form types are also accepted."""
    PROTOCOL = "Protocolo"
    PROJECT = "Projeto"
    HOMOLOGATION = "Homologação"
    SCHEDULING = "Agendamento"
    PROBLEM = "Problema"
    NOTE = "Nota"
    INSPECTION = "Vistoria"
    COMPLETION = "Conclusão"


class Attachment(DocumentModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    data_url: str = ""


class Event(DocumentModel):
    """Immutable audit record of the installation timeline."""
    model_config = ConfigDict(frozen=True)

    id: str
    date: datetime
    type: str
    description: str
    attachments: List[Attachment] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return ensure_aware(v)


class AttachedDocument(DocumentModel):
    name: str = Field(..., min_length=1)
    data_url: str
    type: str = Field(..., description="MIME type")
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return ensure_aware(v)


def new_equipment_id() -> str:
    return uuid4().hex


class Equipment(DocumentModel):
    """Inverters and panels carry an id so they can be moved between installations."""
    id: str = Field(default_factory=new_equipment_id)

    @field_validator("id", mode="before")
    @classmethod
    def assign_missing_id(cls, v: Optional[str]) -> str:
        return v or new_equipment_id()


class Inverter(Equipment):
    brand: str = Field(..., min_length=1, description="Marca")
    model: str = Field(..., min_length=1, description="Modelo")
    serial_number: str = Field(..., min_length=1, description="Nº de série")
    warranty: Optional[str] = None
    datalogger_id: Optional[str] = None


class Panel(Equipment):
    brand: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    power: float = Field(..., gt=0, description="Potência (W)")
    quantity: int = Field(..., gt=0)


class Installation(DocumentModel):
    """The central entity: one solar installation and its three status tracks."""
    id: int
    installation_id: str
    client_id: Optional[int] = None
    client_name: str
    address: str
    city: str
    state: str
    zip_code: str
    installation_type: InstallationType
    utility_company: str
    protocol_number: Optional[str] = None
    protocol_date: Optional[datetime] = None

    inverters: List[Inverter] = Field(default_factory=list)
    panels: List[Panel] = Field(default_factory=list)

    status: str = DEFAULT_STATUS_CONFIG["installation"][0]
    project_status: str = DEFAULT_STATUS_CONFIG["project"][0]
    homologation_status: str = DEFAULT_STATUS_CONFIG["homologation"][0]
    report_submitted: bool = False
    scheduled_date: Optional[datetime] = None

    events: List[Event] = Field(default_factory=list)
    documents: List[AttachedDocument] = Field(default_factory=list)
    archived: bool = False

    @field_validator("protocol_date", "scheduled_date", mode="before")
    @classmethod
    def empty_string_is_none(cls, v: Any) -> Any:
        # Older records store "" for an unset date
        return v or None

    @field_validator("protocol_date", "scheduled_date")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v) if v else v


class InstallationCreate(BaseModel):
    """Payload of the "Nova Instalação" form. Address fields default to the client's."""
    client_id: int = Field(..., description="Cliente vinculado")
    installation_type: InstallationType
    utility_company: str = Field(..., min_length=2, description="Concessionária")
    protocol_number: Optional[str] = None
    address: Optional[str] = Field(None, min_length=5)
    city: Optional[str] = Field(None, min_length=2)
    state: Optional[str] = Field(None, min_length=2)
    zip_code: Optional[str] = Field(None, min_length=8)


class InstallationUpdate(BaseModel):
    """Descriptive fields editable outside the workflow. Status tracks change only via the engine."""
    address: Optional[str] = Field(None, min_length=5)
    city: Optional[str] = Field(None, min_length=2)
    state: Optional[str] = Field(None, min_length=2)
    zip_code: Optional[str] = Field(None, min_length=8)
    installation_type: Optional[InstallationType] = None
    utility_company: Optional[str] = Field(None, min_length=2)
    inverters: Optional[List[Inverter]] = None
    panels: Optional[List[Panel]] = None


class InstallationFilters(BaseModel):
    """Table view filters. Every field left unset matches everything."""
    search: Optional[str] = Field(None, description="Nome do cliente ou cidade")
    status: Optional[str] = None
    project_status: Optional[str] = None
    homologation_status: Optional[str] = None
    installation_type: Optional[InstallationType] = None
    archived: Optional[bool] = None

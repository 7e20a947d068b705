"""
Pydantic schemas for clients.
Enforces the same field constraints as the client registration form.
"""
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from solarview.installations.schemas import DocumentModel

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class ClientType(str, Enum):
    INDIVIDUAL = "pessoa_fisica"
    COMPANY = "pessoa_juridica"


class ClientData(DocumentModel):
    """Client registration payload."""
    name: str = Field(..., min_length=2, description="Nome do cliente")
    client_type: ClientType
    document: str = Field(..., min_length=11, description="CPF/CNPJ")
    email: Optional[str] = None
    phone: Optional[str] = None
    address: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2)
    state: str = Field(..., min_length=2)
    zip_code: str = Field(..., min_length=8, description="CEP")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """Empty e-mail is allowed; anything else must look like an address."""
        if v and not EMAIL_PATTERN.match(v):
            raise ValueError('Invalid e-mail')
        return v or None


class Client(ClientData):
    id: int


class ClientSummary(Client):
    installation_count: int = 0


class ClientListResponse(BaseModel):
    total: int
    clients: list[ClientSummary]

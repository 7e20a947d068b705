"""
Pydantic schemas for the status catalog.
The catalog is the ordered list of labels an administrator allows on each status track.
"""
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class StatusCategory(str, Enum):
    INSTALLATION = "installation"
    PROJECT = "project"
    HOMOLOGATION = "homologation"


DEFAULT_STATUS_CONFIG: Dict[str, List[str]] = {
    StatusCategory.INSTALLATION.value: ["Pendente", "Agendado", "Em Andamento", "Concluído", "Cancelado"],
    StatusCategory.PROJECT.value: ["Não Enviado", "Enviado para Análise", "Aprovado", "Reprovado"],
    StatusCategory.HOMOLOGATION.value: ["Pendente", "Aprovado", "Reprovado"],
}


def _check_labels(labels: List[str]) -> List[str]:
    if any(not label.strip() for label in labels):
        raise ValueError("Status labels cannot be empty")
    if len(set(labels)) != len(labels):
        raise ValueError("Status labels must be unique")
    return labels


class StatusConfig(BaseModel):
    """The three catalogs, persisted together as the statusConfig document."""
    installation: List[str] = Field(default_factory=lambda: list(DEFAULT_STATUS_CONFIG["installation"]))
    project: List[str] = Field(default_factory=lambda: list(DEFAULT_STATUS_CONFIG["project"]))
    homologation: List[str] = Field(default_factory=lambda: list(DEFAULT_STATUS_CONFIG["homologation"]))

    @field_validator("installation", "project", "homologation")
    @classmethod
    def validate_labels(cls, v: List[str]) -> List[str]:
        return _check_labels(v)

    def statuses(self, category: StatusCategory) -> List[str]:
        return getattr(self, category.value)


class StatusLabelRequest(BaseModel):
    label: str = Field(..., min_length=1, description="Novo status")


class StatusRenameRequest(BaseModel):
    old: str = Field(..., min_length=1)
    new: str = Field(..., min_length=1)


class StatusReorderRequest(BaseModel):
    order: List[str] = Field(..., description="Permutation of the current labels")

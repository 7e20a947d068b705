"""
Public tracking page.
Reduces an installation to five customer-facing milestones. Read-only.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from solarview.core.utils import format_brasilia_date, format_brasilia_datetime
from solarview.installations.schemas import Installation


class MilestoneState(str, Enum):
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    ERROR = "error"
    PENDING = "pending"


class Milestone(BaseModel):
    title: str
    state: MilestoneState
    detail: Optional[str] = None


class TrackingPage(BaseModel):
    installation_id: str
    client_name: str
    city: str
    state: str
    milestones: List[Milestone]


def _protocol(installation: Installation) -> Milestone:
    if installation.protocol_number:
        detail = f"Protocolo {installation.protocol_number}"
        if installation.protocol_date:
            detail += f" aberto em {format_brasilia_date(installation.protocol_date)}"
        return Milestone(title="Protocolo Aberto", state=MilestoneState.COMPLETED, detail=detail)
    return Milestone(title="Protocolo Aberto", state=MilestoneState.PENDING)


def _project(installation: Installation) -> Milestone:
    states = {
        "Aprovado": MilestoneState.COMPLETED,
        "Reprovado": MilestoneState.ERROR,
        "Não Enviado": MilestoneState.PENDING,
    }
    return Milestone(
        title="Análise do Projeto",
        state=states.get(installation.project_status, MilestoneState.IN_PROGRESS),
        detail=installation.project_status,
    )


def _scheduling(installation: Installation) -> Milestone:
    if installation.scheduled_date:
        return Milestone(
            title="Agendamento da Instalação",
            state=MilestoneState.COMPLETED,
            detail=f"Agendado para {format_brasilia_datetime(installation.scheduled_date)}",
        )
    return Milestone(title="Agendamento da Instalação", state=MilestoneState.PENDING)


def _execution(installation: Installation) -> Milestone:
    states = {
        "Concluído": MilestoneState.COMPLETED,
        "Cancelado": MilestoneState.ERROR,
        "Em Andamento": MilestoneState.IN_PROGRESS,
    }
    return Milestone(
        title="Execução da Instalação",
        state=states.get(installation.status, MilestoneState.PENDING),
        detail=installation.status,
    )


def _homologation(installation: Installation) -> Milestone:
    states = {
        "Aprovado": MilestoneState.COMPLETED,
        "Reprovado": MilestoneState.ERROR,
    }
    return Milestone(
        title="Homologação",
        state=states.get(installation.homologation_status, MilestoneState.PENDING),
        detail=installation.homologation_status,
    )


def build_tracking_page(installation: Installation) -> TrackingPage:
    return TrackingPage(
        installation_id=installation.installation_id,
        client_name=installation.client_name,
        city=installation.city,
        state=installation.state,
        milestones=[
            _protocol(installation),
            _project(installation),
            _scheduling(installation),
            _execution(installation),
            _homologation(installation),
        ],
    )

"""
Status track registry.
Each track identifier resolves to a handler that knows its field, its human label,
how to parse an incoming value and how to render a stored one.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from solarview.catalog.schemas import StatusCategory, StatusConfig
from solarview.core.exceptions import InvalidInputError
from solarview.installations.schemas import Installation

REPORT_SENT = "Enviado"
REPORT_PENDING = "Pendente"


class Track(str, Enum):
    STATUS = "status"
    PROJECT_STATUS = "projectStatus"
    HOMOLOGATION_STATUS = "homologationStatus"
    REPORT_SUBMITTED = "reportSubmitted"


class TrackHandler:
    """String-valued track backed by a status catalog."""

    def __init__(self, track: Track, label: str, field: str, category: Optional[StatusCategory] = None):
        self.track = track
        self.label = label
        self.field = field
        self.category = category

    def parse(self, value: str) -> Any:
        return value

    def format(self, value: Any) -> str:
        return str(value)

    def current(self, installation: Installation) -> Any:
        return getattr(installation, self.field)

    def display(self, installation: Installation) -> str:
        return self.format(self.current(installation))

    def columns(self, config: StatusConfig) -> List[str]:
        return list(config.statuses(self.category))


class ReportTrackHandler(TrackHandler):
    """Boolean track driven through the sentinel labels "Enviado" / "Pendente"."""

    def __init__(self):
        super().__init__(Track.REPORT_SUBMITTED, "Relatório Técnico", "report_submitted")

    def parse(self, value: str) -> bool:
        if value == REPORT_SENT:
            return True
        if value == REPORT_PENDING:
            return False
        raise InvalidInputError(
            f'Invalid report status "{value}". Use "{REPORT_SENT}" or "{REPORT_PENDING}"'
        )

    def format(self, value: Any) -> str:
        return REPORT_SENT if value else REPORT_PENDING

    def columns(self, config: StatusConfig) -> List[str]:
        return [REPORT_SENT, REPORT_PENDING]


TRACKS: Dict[Track, TrackHandler] = {
    Track.STATUS: TrackHandler(
        Track.STATUS, "Status da Instalação", "status", StatusCategory.INSTALLATION
    ),
    Track.PROJECT_STATUS: TrackHandler(
        Track.PROJECT_STATUS, "Status do Projeto", "project_status", StatusCategory.PROJECT
    ),
    Track.HOMOLOGATION_STATUS: TrackHandler(
        Track.HOMOLOGATION_STATUS, "Status da Homologação", "homologation_status", StatusCategory.HOMOLOGATION
    ),
    Track.REPORT_SUBMITTED: ReportTrackHandler(),
}


def get_track_handler(track: Any) -> TrackHandler:
    """Resolves a Track or its string identifier (e.g. "projectStatus")."""
    try:
        return TRACKS[Track(track)]
    except ValueError:
        raise InvalidInputError(f'Unknown status track "{track}"')

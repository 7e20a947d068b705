"""
FastAPI Router for the installation calendar.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from solarview.calendar.service import CalendarEntry, calendar_entries
from solarview.core.dependencies import get_installation_repository
from solarview.core.utils import ensure_aware
from solarview.installations.repository import InstallationRepository

router = APIRouter(tags=["Calendar"])


@router.get("/", response_model=List[CalendarEntry])
def list_calendar_entries(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    repository: InstallationRepository = Depends(get_installation_repository)
) -> List[CalendarEntry]:
    """Scheduled visits, optionally restricted to a [start, end] window."""
    return calendar_entries(
        repository.load(),
        start=ensure_aware(start) if start else None,
        end=ensure_aware(end) if end else None,
    )

"""
Calendar view: scheduled installation visits.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from solarview.installations.schemas import Installation
from solarview.workflow.engine import SCHEDULED_STATUS


class CalendarEntry(BaseModel):
    id: int
    installation_id: str
    title: str
    start: datetime
    end: datetime


def calendar_entries(
    installations: List[Installation],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None
) -> List[CalendarEntry]:
    """
    One entry per installation with a scheduled date whose status is still "Agendado".
    Visits have no duration: start and end are the same instant.
    """
    entries = []
    for inst in installations:
        if not inst.scheduled_date or inst.status != SCHEDULED_STATUS:
            continue
        if start and inst.scheduled_date < start:
            continue
        if end and inst.scheduled_date > end:
            continue
        entries.append(CalendarEntry(
            id=inst.id,
            installation_id=inst.installation_id,
            title=inst.client_name,
            start=inst.scheduled_date,
            end=inst.scheduled_date,
        ))
    return sorted(entries, key=lambda e: e.start)

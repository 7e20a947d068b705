"""
Pydantic schemas for workflow actions.
Input is validated here, before it reaches the engine.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from solarview.installations.schemas import Attachment
from solarview.workflow.engine import TIME_PATTERN
from solarview.workflow.tracks import Track


class TransitionRequest(BaseModel):
    """Explicit status selection (dropdown) on one track."""
    track: Track = Field(..., description="status, projectStatus, homologationStatus or reportSubmitted")
    value: str = Field(..., min_length=1, description="New status label (Enviado/Pendente for reportSubmitted)")


class ScheduleRequest(BaseModel):
    """Schedule dialog payload. Date and time are Brasília local time."""
    date: date
    time: Optional[str] = Field(None, description="HH:mm")
    notes: Optional[str] = None

    @field_validator('time')
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        if v and not TIME_PATTERN.match(v):
            raise ValueError('Invalid time format. Use HH:mm')
        return v


class ManualEventRequest(BaseModel):
    type: str = Field("Nota", min_length=1, description="Event type")
    description: str = Field(..., min_length=1)
    date: datetime = Field(..., description="Without an offset the date is read as Brasília time")
    attachments: List[Attachment] = Field(default_factory=list)


class ProtocolUpdateRequest(BaseModel):
    protocol_number: Optional[str] = Field(None, description="Empty clears the protocol")


class DocumentUploadRequest(BaseModel):
    name: str = Field(..., min_length=1)
    data_url: str = Field(..., min_length=1)
    type: str = Field("application/octet-stream", description="MIME type")

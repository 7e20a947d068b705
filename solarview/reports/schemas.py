"""
Pydantic schemas for the installer field report and the AI final report.
The payload is stored as submitted, under the client's name.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from solarview.installations.schemas import DocumentModel, Inverter, Panel

MAX_STRINGS = 6
MAX_PHOTOS = 12


class StringMeasurement(DocumentModel):
    """One DC string: open-circuit voltage (VCC) and number of plates."""
    voltage: Optional[float] = None
    plates: Optional[int] = None


class PhotoUpload(DocumentModel):
    data_url: Optional[str] = ""
    annotation: Optional[str] = ""


class InstallerReport(DocumentModel):
    client_name: str = Field(..., min_length=1)
    inverters: List[Inverter] = Field(default_factory=list)
    panels: List[Panel] = Field(default_factory=list)
    strings: List[StringMeasurement] = Field(default_factory=list, max_length=MAX_STRINGS)

    # AC measurements (V)
    phase1_neutro: Optional[float] = Field(None, alias="phase1Neutro")
    phase2_neutro: Optional[float] = Field(None, alias="phase2Neutro")
    phase3_neutro: Optional[float] = Field(None, alias="phase3Neutro")
    phase1_phase2: Optional[float] = Field(None, alias="phase1phase2")
    phase1_phase3: Optional[float] = Field(None, alias="phase1phase3")
    phase2_phase3: Optional[float] = Field(None, alias="phase2phase3")
    phase_terra: Optional[float] = Field(None, alias="phaseTerra")
    neutro_terra: Optional[float] = Field(None, alias="neutroTerra")

    cable_meter_to_breaker: Optional[str] = None
    cable_breaker_to_inverter: Optional[str] = None
    general_breaker: Optional[str] = None
    inverter_breaker: Optional[str] = None

    datalogger_connected: bool = False
    observations: Optional[str] = None
    photo_uploads: List[PhotoUpload] = Field(default_factory=list, alias="photo_uploads", max_length=MAX_PHOTOS)
    installation_video_data_url: Optional[str] = ""


class ReportSubmission(BaseModel):
    client_name: str
    updated_installations: List[int]


class FinalReportRequest(BaseModel):
    protocol_number: Optional[str] = Field(None, description="Defaults to the installation's protocol number")


class FinalReport(BaseModel):
    installation_id: int
    client_name: str
    protocol_number: str
    final_report: str

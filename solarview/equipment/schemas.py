"""
Pydantic schemas for the equipment screens.
"""
from typing import List

from pydantic import BaseModel, Field

from solarview.installations.schemas import Inverter, Panel


class EquipmentInventory(BaseModel):
    inverters: List[Inverter]
    panels: List[Panel]


class InverterLocation(BaseModel):
    """Serial number search result: the inverter and where it is installed."""
    inverter: Inverter
    installation_id: int
    installation_code: str
    client_name: str
    city: str
    state: str


class TransferRequest(BaseModel):
    source_installation_id: int
    destination_installation_id: int
    inverter_id: str = Field(..., min_length=1)


class TransferResponse(BaseModel):
    source_installation_id: int
    destination_installation_id: int
    source_inverter_count: int
    destination_inverter_count: int

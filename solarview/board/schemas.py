"""
Pydantic schemas for Kanban boards.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from solarview.installations.schemas import Installation
from solarview.workflow.tracks import Track


class BoardColumn(BaseModel):
    id: str = Field(..., description="Status value represented by the column")
    title: str
    installations: List[Installation]
    orphan: bool = Field(False, description="Status no longer present in the catalog")


class Board(BaseModel):
    track: Track
    label: str
    columns: List[BoardColumn]


class MoveRequest(BaseModel):
    """A card dropped on a column or on another card."""
    installation_id: int
    column_id: Optional[str] = None
    over_installation_id: Optional[int] = None

    @model_validator(mode="after")
    def check_target(self) -> "MoveRequest":
        if (self.column_id is None) == (self.over_installation_id is None):
            raise ValueError("Provide exactly one of column_id or over_installation_id")
        return self

"""
Pydantic models for the catalog import endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import IngestionStatus


class ImportRequest(BaseModel):
    """Body of POST /api/import-csv. Accepts ``csvUrl`` or ``csv_url``."""
    model_config = ConfigDict(populate_by_name=True)

    csv_url: Optional[str] = Field(None, alias="csvUrl", description="Spreadsheet CSV export URL")


class ImportAccepted(BaseModel):
    """Immediate acknowledgement; the import itself runs in the background."""
    message: str
    status: str = "processing"
    run_id: str


class IngestionRun(BaseModel):
    """Status record of one background import."""
    run_id: str
    source_url: str
    status: IngestionStatus
    rows_read: int = 0
    merch_created: int = 0
    albums_created: int = 0
    tracks_created: int = 0
    rows_failed: int = 0
    errors: list[str] = Field(default_factory=list)
    message: Optional[str] = None
    created_at: Optional[str] = None
    started_at: Optional[str] = None
    finished_at: Optional[str] = None

"""
/api/import-csv endpoints.

The trigger answers 202 immediately; the import runs on a background
thread and its outcome is recorded under the returned run id.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..feature_flags import FeatureFlags, get_feature_flags
from ..models.ingestion import ImportAccepted, ImportRequest, IngestionRun
from ..services.ingestion_runs import IngestionRunner, get_ingestion_runner

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


@router.post("/import-csv", response_model=ImportAccepted, status_code=202)
async def import_csv(
    request: ImportRequest,
    flags: FeatureFlags = Depends(get_feature_flags),
    runner: IngestionRunner = Depends(get_ingestion_runner),
) -> ImportAccepted:
    """Start a catalog import from a spreadsheet CSV export URL."""
    if not flags.feature_catalog_import:
        raise HTTPException(status_code=503, detail="Catalog import is disabled")

    csv_url = (request.csv_url or "").strip()
    if not csv_url:
        raise HTTPException(status_code=400, detail="CSV URL is required")

    run_id = runner.submit(csv_url)
    return ImportAccepted(message="CSV import started", status="processing", run_id=run_id)


@router.get("/import-csv/{run_id}", response_model=IngestionRun)
async def get_import_status(
    run_id: str,
    runner: IngestionRunner = Depends(get_ingestion_runner),
) -> IngestionRun:
    run = runner.get(run_id)
    if run is None:
        raise HTTPException(status_code=404, detail="Import run not found")
    return run

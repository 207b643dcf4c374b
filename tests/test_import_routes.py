"""Tests for the /api/import-csv trigger and status endpoints."""

import pytest
from fastapi.testclient import TestClient

from hawkeye.feature_flags import FeatureFlags, get_feature_flags
from hawkeye.ingestion.protocols import IngestionStats
from hawkeye.models.enums import IngestionStatus
from hawkeye.services.ingestion_runs import (
    IngestionRunner,
    IngestionRunRepository,
    get_ingestion_runner,
)
from main import app

CATALOG_URL = "https://sheets.example.com/catalog.csv"


class RecordingPipeline:
    def __init__(self):
        self.urls = []

    def run(self, url):
        self.urls.append(url)
        return IngestionStats(source=url, rows_read=3, albums_created=1, tracks_created=2)


@pytest.fixture
def pipeline():
    return RecordingPipeline()


@pytest.fixture
def runner(db_path, pipeline):
    runner = IngestionRunner(
        runs=IngestionRunRepository(db_path),
        pipeline_factory=lambda: pipeline,
        max_workers=1,
    )
    yield runner
    runner.shutdown()


@pytest.fixture
def client(runner):
    app.dependency_overrides[get_ingestion_runner] = lambda: runner
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestTrigger:
    def test_accepted_immediately(self, client, runner, pipeline):
        response = client.post("/api/import-csv", json={"csvUrl": CATALOG_URL})

        assert response.status_code == 202
        data = response.json()
        assert data["message"] == "CSV import started"
        assert data["status"] == "processing"

        run = runner.wait(data["run_id"], timeout=5)
        assert run.status == IngestionStatus.COMPLETE
        assert pipeline.urls == [CATALOG_URL]

    def test_snake_case_field_accepted(self, client, runner):
        response = client.post("/api/import-csv", json={"csv_url": CATALOG_URL})
        assert response.status_code == 202
        runner.wait(response.json()["run_id"], timeout=5)

    @pytest.mark.parametrize("body", [{}, {"csvUrl": ""}, {"csvUrl": "   "}])
    def test_missing_url_is_400(self, client, pipeline, body):
        response = client.post("/api/import-csv", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "CSV URL is required"
        assert pipeline.urls == []

    def test_disabled_by_feature_flag(self, client, pipeline):
        app.dependency_overrides[get_feature_flags] = lambda: FeatureFlags(feature_catalog_import=False)

        response = client.post("/api/import-csv", json={"csvUrl": CATALOG_URL})

        assert response.status_code == 503
        assert pipeline.urls == []


class TestStatus:
    def test_status_of_finished_run(self, client, runner):
        run_id = client.post("/api/import-csv", json={"csvUrl": CATALOG_URL}).json()["run_id"]
        runner.wait(run_id, timeout=5)

        response = client.get(f"/api/import-csv/{run_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "complete"
        assert data["source_url"] == CATALOG_URL
        assert data["tracks_created"] == 2

    def test_unknown_run_is_404(self, client):
        assert client.get("/api/import-csv/does-not-exist").status_code == 404

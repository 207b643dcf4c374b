"""
Background catalog imports.

The import endpoint answers 202 right away and never waits for the run.
IngestionRunner hands each run to a thread pool and records its lifecycle
in the ``ingestion_runs`` table (accepted -> running -> complete | failed),
where the outcome can be looked up by run id.

There is no cancellation and no timeout for an in-flight run.
"""

import json
import logging
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional

from ..db import BaseRepository
from ..ingestion.errors import SourceFetchError
from ..ingestion.protocols import IngestionStats
from ..models.enums import IngestionStatus
from ..models.ingestion import IngestionRun

logger = logging.getLogger(__name__)


class IngestionRunRepository(BaseRepository):
    """Thread-safe SQLite repository for import run status records."""

    def create(self, run_id: str, source_url: str) -> None:
        with self._transaction() as cursor:
            cursor.execute("""
                INSERT INTO ingestion_runs (run_id, source_url, status)
                VALUES (?, ?, ?)
            """, (run_id, source_url, IngestionStatus.ACCEPTED.value))

    def mark_running(self, run_id: str) -> None:
        with self._transaction() as cursor:
            cursor.execute("""
                UPDATE ingestion_runs
                SET status = ?, started_at = CURRENT_TIMESTAMP
                WHERE run_id = ?
            """, (IngestionStatus.RUNNING.value, run_id))

    def mark_complete(self, run_id: str, stats: IngestionStats) -> None:
        with self._transaction() as cursor:
            cursor.execute("""
                UPDATE ingestion_runs
                SET status = ?, rows_read = ?, merch_created = ?, albums_created = ?,
                    tracks_created = ?, rows_failed = ?, errors = ?,
                    finished_at = CURRENT_TIMESTAMP
                WHERE run_id = ?
            """, (
                IngestionStatus.COMPLETE.value,
                stats.rows_read,
                stats.merch_created,
                stats.albums_created,
                stats.tracks_created,
                stats.rows_failed,
                json.dumps(stats.errors),
                run_id,
            ))

    def mark_failed(self, run_id: str, message: str) -> None:
        with self._transaction() as cursor:
            cursor.execute("""
                UPDATE ingestion_runs
                SET status = ?, message = ?, finished_at = CURRENT_TIMESTAMP
                WHERE run_id = ?
            """, (IngestionStatus.FAILED.value, message, run_id))

    def get(self, run_id: str) -> Optional[IngestionRun]:
        row = self._fetchone("SELECT * FROM ingestion_runs WHERE run_id = ?", (run_id,))
        return self._row_to_run(row) if row else None

    def list_recent(self, limit: int = 20) -> list[IngestionRun]:
        rows = self._fetchall("""
            SELECT * FROM ingestion_runs
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
        """, (limit,))
        return [self._row_to_run(row) for row in rows]

    @staticmethod
    def _row_to_run(row) -> IngestionRun:
        return IngestionRun(
            run_id=row["run_id"],
            source_url=row["source_url"],
            status=IngestionStatus(row["status"]),
            rows_read=row["rows_read"],
            merch_created=row["merch_created"],
            albums_created=row["albums_created"],
            tracks_created=row["tracks_created"],
            rows_failed=row["rows_failed"],
            errors=json.loads(row["errors"]) if row["errors"] else [],
            message=row["message"],
            created_at=row["created_at"],
            started_at=row["started_at"],
            finished_at=row["finished_at"],
        )


def _default_pipeline_factory():
    # Lazy import: the pipeline pulls in the repository module
    from ..ingestion.pipeline import CatalogImportPipeline
    return CatalogImportPipeline()


class IngestionRunner:
    """
    Supervised background runner for catalog imports.

    ``submit`` returns a run id immediately; the run executes on a worker
    thread and its outcome lands in IngestionRunRepository.
    """

    def __init__(
        self,
        runs: Optional[IngestionRunRepository] = None,
        pipeline_factory: Optional[Callable] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize runner.

        Args:
            runs: Run status repository (creates default if None)
            pipeline_factory: Zero-arg callable returning an object with ``run(url)``
            max_workers: Worker threads. Defaults to Config.import_workers()
        """
        if max_workers is None:
            from ..config import Config
            max_workers = Config.import_workers()

        self.runs = runs or IngestionRunRepository()
        self._pipeline_factory = pipeline_factory or _default_pipeline_factory
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="catalog-import")
        self._futures: dict[str, Future] = {}
        self._lock = threading.Lock()

    def submit(self, source_url: str) -> str:
        """Record an accepted run and start it in the background. Returns the run id."""
        run_id = str(uuid.uuid4())
        self.runs.create(run_id, source_url)

        future = self._executor.submit(self._execute, run_id, source_url)
        with self._lock:
            self._futures[run_id] = future
        future.add_done_callback(lambda _: self._forget(run_id))

        logger.info(f"Catalog import {run_id} accepted for {source_url}")
        return run_id

    def _forget(self, run_id: str) -> None:
        with self._lock:
            self._futures.pop(run_id, None)

    def _execute(self, run_id: str, source_url: str) -> Optional[IngestionStats]:
        self.runs.mark_running(run_id)
        try:
            stats = self._pipeline_factory().run(source_url)
        except SourceFetchError as e:
            logger.error(f"Catalog import {run_id} failed: {e}")
            self.runs.mark_failed(run_id, str(e))
            return None
        except Exception as e:
            logger.error(f"Catalog import {run_id} crashed: {e}", exc_info=True)
            self.runs.mark_failed(run_id, f"Unexpected error: {e}")
            return None

        self.runs.mark_complete(run_id, stats)
        logger.info(f"Catalog import {run_id} complete: {stats.to_dict()}")
        return stats

    def wait(self, run_id: str, timeout: Optional[float] = None) -> Optional[IngestionRun]:
        """
        Block until a run finishes and return its status record.

        Returns the current record if the run already finished; raises
        TimeoutError if it is still running after ``timeout`` seconds.
        """
        with self._lock:
            future = self._futures.get(run_id)
        if future is not None:
            try:
                future.result(timeout=timeout)
            except FutureTimeoutError:
                raise TimeoutError(f"Catalog import {run_id} still running") from None
        return self.runs.get(run_id)

    def get(self, run_id: str) -> Optional[IngestionRun]:
        return self.runs.get(run_id)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting runs; optionally wait for in-flight runs."""
        self._executor.shutdown(wait=wait)


# Singleton runner instance
_runner: Optional[IngestionRunner] = None


def get_ingestion_runner() -> IngestionRunner:
    """Get or create the ingestion runner singleton. Use FastAPI Depends() for injection."""
    global _runner
    if _runner is None:
        _runner = IngestionRunner()
    return _runner


def shutdown_ingestion_runner() -> None:
    """Shut down the singleton runner, if one was started."""
    global _runner
    if _runner is not None:
        _runner.shutdown(wait=False)
        _runner = None

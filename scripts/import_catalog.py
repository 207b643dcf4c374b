#!/usr/bin/env python3
"""
Catalog import CLI tool.

Runs the same import as POST /api/import-csv, but in the foreground.

Usage:
    python scripts/import_catalog.py --url <csv export url>   # Import catalog
    python scripts/import_catalog.py                          # Import from CATALOG_CSV_URL
    python scripts/import_catalog.py --preview 10 --url ...   # Show row classification only
    python scripts/import_catalog.py --stats                  # Show record counts
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
project_path = Path(__file__).parent.parent
sys.path.insert(0, str(project_path))

from dotenv import load_dotenv
load_dotenv()

from hawkeye.config import Config
from hawkeye.db import ensure_schema
from hawkeye.ingestion import CatalogImportPipeline, SourceFetchError
from hawkeye.services.catalog_repository import CatalogRepository


def open_repository() -> CatalogRepository:
    db_path = Config.database_path()
    ensure_schema(db_path)
    return CatalogRepository(db_path)


def import_catalog(url: str) -> int:
    """Run one import. Returns a process exit code."""
    print(f"\n{'='*60}")
    print(f"Importing: {url}")
    print(f"{'='*60}")

    repo = open_repository()
    pipeline = CatalogImportPipeline(repository=repo)

    start = time.time()
    try:
        stats = pipeline.run(url)
    except SourceFetchError as e:
        print(f"\nError: {e}")
        repo.close()
        return 1
    elapsed = time.time() - start

    print(f"\nCompleted in {elapsed:.1f}s")
    print(f"  Rows read: {stats.rows_read:,}")
    print(f"  Merch items created: {stats.merch_created:,}")
    print(f"  Albums created: {stats.albums_created:,}")
    print(f"  Tracks created: {stats.tracks_created:,}")

    if stats.errors:
        print(f"  Errors: {len(stats.errors)}")
        for err in stats.errors[:5]:
            print(f"    - {err}")
        if len(stats.errors) > 5:
            print(f"    ... and {len(stats.errors) - 5} more")

    repo.close()
    return 0


def preview_catalog(url: str, limit: int) -> int:
    """Print how the first rows would be classified."""
    print(f"\nPreview: {url} (first {limit} rows)")
    print("="*60)

    pipeline = CatalogImportPipeline(repository=open_repository())
    try:
        rows = pipeline.preview(url, limit=limit)
    except SourceFetchError as e:
        print(f"\nError: {e}")
        return 1

    for entry in rows:
        print(f"  row {entry['row']:>4}  {entry['branch']:<8} {entry['type'] or '-':<24} {entry['name']}")
    return 0


def show_stats():
    """Print record counts per kind."""
    print("\n" + "="*60)
    print("Catalog Statistics")
    print("="*60)

    repo = open_repository()
    for kind, count in repo.counts().items():
        print(f"  {kind}: {count:,}")
    repo.close()


def main():
    parser = argparse.ArgumentParser(
        description="Catalog import CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--url", "-u",
        help="Spreadsheet CSV export URL (default: CATALOG_CSV_URL)"
    )
    parser.add_argument(
        "--preview", "-p",
        type=int,
        metavar="N",
        help="Preview classification of the first N rows without writing"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show record counts"
    )

    args = parser.parse_args()

    if args.stats:
        show_stats()
        return 0

    url = args.url or Config.default_catalog_url()
    if not url:
        parser.error("--url is required when CATALOG_CSV_URL is not set")

    if args.preview:
        return preview_catalog(url, args.preview)

    code = import_catalog(url)
    if code == 0:
        show_stats()
    return code


if __name__ == "__main__":
    sys.exit(main())

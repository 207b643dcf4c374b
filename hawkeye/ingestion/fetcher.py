"""
Tabular source fetcher for the catalog export.

Downloads a published spreadsheet (CSV export) and parses it into rows
keyed by header name. Header cells have ``.`` rewritten to ``_`` so the
names can be used as stable field keys (``Regular.price`` -> ``Regular_price``).

All-or-nothing: any network or structural problem raises SourceFetchError
and no rows are returned.
"""

import csv
import io
import logging
from typing import Optional

import httpx

from ..config import Config
from .errors import SourceFetchError
from .protocols import RawRow

logger = logging.getLogger(__name__)


def normalize_header(cell: str) -> str:
    """Rewrite the structural ``.`` delimiter in a header cell."""
    return cell.replace(".", "_")


class TabularSourceFetcher:
    """Fetch and parse a remote CSV export."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: Optional[float] = None):
        """
        Initialize fetcher.

        Args:
            client: httpx client to reuse (tests pass one with a MockTransport)
            timeout: Request timeout in seconds. Defaults to Config.fetch_timeout()
        """
        self._client = client
        self.timeout = timeout if timeout is not None else Config.fetch_timeout()

    def fetch(self, url: str) -> list[RawRow]:
        """
        Download the export at ``url`` and parse it.

        Raises:
            SourceFetchError: on network failure, non-success status,
                or malformed tabular structure
        """
        text = self._download(url)
        rows = self.parse(text)
        logger.info(f"Fetched {len(rows)} rows from {url}")
        return rows

    def _download(self, url: str) -> str:
        try:
            if self._client is not None:
                response = self._client.get(url, timeout=self.timeout, follow_redirects=True)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    response = client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPError as e:
            raise SourceFetchError(f"Failed to fetch catalog from {url}: {e}") from e

    @staticmethod
    def parse(text: str) -> list[RawRow]:
        """
        Parse CSV text using the first line as header.

        Empty lines are skipped. A row whose cell count differs from the
        header is treated as a malformed table.
        """
        reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
        header: Optional[list[str]] = None
        rows: list[RawRow] = []

        try:
            for cells in reader:
                if not cells:
                    continue
                if header is None:
                    header = [normalize_header(cell) for cell in cells]
                    continue
                if len(cells) != len(header):
                    raise SourceFetchError(
                        f"Malformed catalog: line {reader.line_num} has {len(cells)} "
                        f"fields, header has {len(header)}"
                    )
                rows.append(dict(zip(header, cells)))
        except csv.Error as e:
            raise SourceFetchError(f"Malformed catalog near line {reader.line_num}: {e}") from e

        return rows

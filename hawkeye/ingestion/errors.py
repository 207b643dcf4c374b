"""
Exceptions raised during catalog ingestion.
"""


class SourceFetchError(Exception):
    """The catalog export could not be downloaded or parsed. Aborts the run."""


class RowError(Exception):
    """A single catalog row failed a field conversion. The run continues."""

    def __init__(self, row_number: int, message: str):
        super().__init__(f"Row {row_number}: {message}")
        self.row_number = row_number

"""
CSV survey dataset loader.

Reads every cell as raw text; conversion happens in the base loader.
"""

from pathlib import Path

import pandas as pd

from surveyload.config.settings import LoaderConfig, ValidationMode
from surveyload.errors import MissingHeaderRow
from surveyload.ingestion.base import DatasetLoader
from surveyload.ingestion.dataset import DatasetLoadAttempt
from surveyload.schemas.survey import Schema
from surveyload.utils.logging import get_logger

log = get_logger(__name__)


class CsvDatasetLoader(DatasetLoader):
    """Loader for delimited text survey files (header row first)."""

    def _read_rows(self, source: Path) -> list[list[str]]:
        """Read raw rows from a CSV file, header included."""
        log.debug("Reading CSV", path=str(source), encoding=self.options.encoding)

        with source.open(encoding=self.options.encoding, newline="") as f:
            try:
                # header=None keeps the header row as data, so repeated names
                # are not mangled into "a.1"
                df = pd.read_csv(
                    f,
                    header=None,
                    dtype=str,
                    keep_default_na=False,
                    na_filter=False,
                    sep=self.options.delimiter,
                    skip_blank_lines=True,
                )
            except pd.errors.EmptyDataError as e:
                msg = f"No header row in {source}"
                raise MissingHeaderRow(msg) from e

        if df.empty:
            msg = f"No header row in {source}"
            raise MissingHeaderRow(msg)

        # Short rows come back padded; pad values count as empty cells
        rows = [
            [v if isinstance(v, str) else "" for v in record]
            for record in df.itertuples(index=False, name=None)
        ]
        log.debug("Read CSV rows", rows=len(rows) - 1, columns=len(rows[0]))
        return rows


def load_dataset_from_csv(
    csv_path: str | Path,
    schema: Schema,
    validation_mode: str | ValidationMode = ValidationMode.FAIL_FAST,
    options: LoaderConfig | None = None,
) -> DatasetLoadAttempt:
    """
    Load a survey CSV file against a schema.

    Args:
        csv_path: Path to the CSV file.
        schema: Survey schema.
        validation_mode: "fail_fast" or "capture_all_errors".
        options: Loader options (separator, encoding, header policy).

    Returns:
        DatasetLoadAttempt describing the outcome.
    """
    loader = CsvDatasetLoader(schema, options)
    return loader.load(csv_path, validation_mode)

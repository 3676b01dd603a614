"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from surveyload.schemas import Column, ColumnType, Schema


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging configuration made by a test (e.g. the CLI's stderr stream)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def survey_schema() -> Schema:
    """Create a small survey schema: two questions and one demographic."""
    return Schema(
        org_node_col="LEVEL1ID",
        columns=(
            Column("Q01", "I like my job", 1, 5, False, ColumnType.QUESTION),
            Column("Q02", "I feel valued", 1, 5, True, ColumnType.QUESTION),
            Column("DEM_AGE", "Age group", 1, 7, True, ColumnType.DEMOGRAPHIC),
        ),
    )


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes CSV text to a temporary file."""

    def _write(text: str, name: str = "survey.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def valid_csv(write_csv: Callable[..., Path]) -> Path:
    """Create a CSV file that fully matches survey_schema."""
    return write_csv(
        "LEVEL1ID,Q01,Q02,DEM_AGE\n"
        "N01.1,1,2,3\n"
        "N01.2,5,,7\n"
        "N02.3.5,3.0,4,\n"
    )


@pytest.fixture
def csv_with_bad_row_5(write_csv: Callable[..., Path]) -> Path:
    """Create a CSV file whose fifth data row has an out-of-range Q01."""
    return write_csv(
        "LEVEL1ID,Q01,Q02,DEM_AGE\n"
        "N01.1,1,2,3\n"
        "N01.1,2,2,3\n"
        "N01.2,3,2,3\n"
        "N01.2,4,2,3\n"
        "N01.3,9,2,3\n"
        "N01.3,5,2,3\n"
    )

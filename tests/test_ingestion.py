"""Tests for the survey dataset loader."""

from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from surveyload.config import LoaderConfig, ValidationMode
from surveyload.errors import (
    DataValidationFailed,
    DuplicateColumnCodes,
    DuplicateHeaderColumns,
    FractionalValueNotAllowed,
    IncompleteHeader,
    InvalidSchemaValidationMode,
    MissingHeaderRow,
    SchemaMinMaxViolation,
)
from surveyload.ingestion import (
    CsvDatasetLoader,
    DataError,
    Dataset,
    DatasetLoadAttempt,
    LoadStatus,
    load_dataset_from_csv,
)
from surveyload.normalization import OrgNode
from surveyload.schemas import Column, Schema

CAPTURE = ValidationMode.CAPTURE_ALL_ERRORS


class TestValidationModeGate:
    """Tests for the validation mode check."""

    def test_invalid_mode_fails_before_reading(
        self, survey_schema: Schema, tmp_path: Path
    ) -> None:
        """Test an invalid mode fails even when the file does not exist."""
        attempt = load_dataset_from_csv(tmp_path / "missing.csv", survey_schema, "bogus")

        assert attempt.succeeded is False
        assert isinstance(attempt.error, InvalidSchemaValidationMode)
        assert attempt.dataset is None
        assert attempt.header is None

    def test_invalid_mode_with_valid_file(
        self, survey_schema: Schema, valid_csv: Path
    ) -> None:
        """Test an invalid mode fails regardless of file content."""
        attempt = load_dataset_from_csv(valid_csv, survey_schema, "FAIL_FAST")
        assert isinstance(attempt.error, InvalidSchemaValidationMode)
        assert attempt.status is LoadStatus.FAILED

    @pytest.mark.parametrize("mode", ["fail_fast", "capture_all_errors"])
    def test_mode_strings_accepted(
        self, survey_schema: Schema, valid_csv: Path, mode: str
    ) -> None:
        """Test both mode strings are accepted."""
        attempt = load_dataset_from_csv(valid_csv, survey_schema, mode)
        assert attempt.succeeded is True

    def test_configured_mode_used_by_default(
        self, survey_schema: Schema, csv_with_bad_row_5: Path
    ) -> None:
        """Test the loader falls back to the configured mode."""
        loader = CsvDatasetLoader(survey_schema, LoaderConfig(validation_mode=CAPTURE))
        attempt = loader.load(csv_with_bad_row_5)
        assert attempt.status is LoadStatus.LOADED_WITH_ERRORS


class TestSuccessfulLoad:
    """Tests for loading valid files."""

    def test_valid_file(self, survey_schema: Schema, valid_csv: Path) -> None:
        """Test a fully valid file loads with no errors."""
        attempt = load_dataset_from_csv(valid_csv, survey_schema, "fail_fast")

        assert attempt.succeeded is True
        assert attempt.error is None
        assert attempt.data_errors == ()
        assert attempt.status is LoadStatus.LOADED
        assert attempt.header is not None and attempt.header.is_complete

        dataset = attempt.dataset
        assert dataset is not None
        assert dataset.row_count == 3
        assert dataset.org_nodes[1] == OrgNode((1, 1))
        assert dataset.org_nodes[3] == OrgNode((2, 3, 5))
        assert dataset.value(1, "Q01") == 1
        assert dataset.value(3, "Q01") == 3  # "3.0"
        assert dataset.value(2, "Q02") is None  # nullable empty cell
        assert dataset.value(3, "DEM_AGE") is None

    def test_values_for_column(self, survey_schema: Schema, valid_csv: Path) -> None:
        """Test per-column value access."""
        attempt = load_dataset_from_csv(valid_csv, survey_schema)
        assert attempt.dataset is not None
        assert attempt.dataset.values_for("Q01") == {1: 1, 2: 5, 3: 3}

    def test_distinct_nodes(
        self, survey_schema: Schema, csv_with_bad_row_5: Path
    ) -> None:
        """Test nodes() lists distinct org nodes in first-seen order."""
        attempt = load_dataset_from_csv(csv_with_bad_row_5, survey_schema, CAPTURE)
        assert attempt.dataset is not None
        assert attempt.dataset.nodes() == [
            OrgNode((1, 1)),
            OrgNode((1, 2)),
            OrgNode((1, 3)),
        ]

    def test_reordered_and_extra_columns(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test columns are matched by name and extra columns are skipped."""
        path = write_csv("COMMENT,Q02,DEM_AGE,LEVEL1ID,Q01\nfree text,2,1,N05.1,4\n")
        attempt = load_dataset_from_csv(path, survey_schema, "fail_fast")

        assert attempt.succeeded is True
        assert attempt.header is not None
        assert attempt.header.extra_columns == ("COMMENT",)
        assert attempt.dataset is not None
        assert attempt.dataset.value(1, "Q01") == 4
        assert attempt.dataset.value(1, "Q02") == 2
        assert (1, "COMMENT") not in attempt.dataset.data

    def test_trailing_delimiters_in_header(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test unnamed trailing columns are skipped rather than rejected."""
        path = write_csv("LEVEL1ID,Q01,Q02,DEM_AGE,,\nN01.1,1,2,3,,\nN01.2,4,,1,x,\n")
        attempt = load_dataset_from_csv(path, survey_schema, "fail_fast")

        assert attempt.succeeded is True
        assert attempt.header is not None
        assert attempt.header.extra_columns == ("",)
        assert attempt.dataset is not None
        assert attempt.dataset.row_count == 2
        assert attempt.dataset.value(2, "Q01") == 4

    def test_columns_resolved_once_per_load(
        self,
        survey_schema: Schema,
        csv_with_bad_row_5: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test cells are converted without a per-cell schema lookup."""

        def no_lookup(self: Schema, code: str) -> Column:
            msg = f"per-cell lookup of {code!r}"
            raise AssertionError(msg)

        monkeypatch.setattr(Schema, "column_by_code", no_lookup)
        attempt = load_dataset_from_csv(csv_with_bad_row_5, survey_schema, CAPTURE)

        assert attempt.succeeded is True
        assert [(e.line_num, e.column_name) for e in attempt.data_errors] == [(5, "Q01")]
        assert attempt.dataset is not None
        assert attempt.dataset.value(6, "Q01") == 5

    def test_missing_column_is_not_fatal(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test a missing schema column is reported but the load succeeds."""
        path = write_csv("LEVEL1ID,Q01,DEM_AGE\nN01.1,1,2\n")
        attempt = load_dataset_from_csv(path, survey_schema, "fail_fast")

        assert attempt.succeeded is True
        assert attempt.header is not None
        assert attempt.header.missing_columns == ("Q02",)
        assert attempt.dataset is not None
        assert (1, "Q02") not in attempt.dataset.data

    def test_quoted_cells(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test standard CSV quoting."""
        path = write_csv('LEVEL1ID,Q01,Q02,DEM_AGE\n"N01.2, Finance","2","3",""\n')
        attempt = load_dataset_from_csv(path, survey_schema, "fail_fast")

        assert attempt.succeeded is True
        assert attempt.dataset is not None
        assert attempt.dataset.org_nodes[1] == OrgNode((1, 2))

    def test_header_only(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test a file with only a header loads an empty dataset."""
        path = write_csv("LEVEL1ID,Q01,Q02,DEM_AGE\n")
        attempt = load_dataset_from_csv(path, survey_schema, "fail_fast")

        assert attempt.succeeded is True
        assert attempt.dataset is not None
        assert attempt.dataset.row_count == 0

    def test_custom_delimiter_and_separator(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test loader options for delimiter and org node separator."""
        path = write_csv("LEVEL1ID;Q01;Q02;DEM_AGE\nN02/3;1;2;3\n")
        options = LoaderConfig(delimiter=";", org_node_separator="/")
        attempt = CsvDatasetLoader(survey_schema, options).load(path)

        assert attempt.succeeded is True
        assert attempt.dataset is not None
        assert attempt.dataset.org_nodes[1] == OrgNode((2, 3))


class TestFailFast:
    """Tests for fail_fast mode."""

    def test_bad_row_aborts(
        self, survey_schema: Schema, csv_with_bad_row_5: Path
    ) -> None:
        """Test one bad cell returns a single fatal error and no dataset."""
        attempt = load_dataset_from_csv(csv_with_bad_row_5, survey_schema, "fail_fast")

        assert attempt.succeeded is False
        assert attempt.dataset is None
        assert attempt.data_errors == ()
        assert isinstance(attempt.error, DataValidationFailed)
        assert attempt.error.data_error.line_num == 5
        assert attempt.error.data_error.column_name == "Q01"
        assert isinstance(attempt.error.__cause__, SchemaMinMaxViolation)

    def test_fractional_value(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test a fractional cell aborts the load."""
        path = write_csv("LEVEL1ID,Q01,Q02,DEM_AGE\nN01.1,3.5,2,3\n")
        attempt = load_dataset_from_csv(path, survey_schema, "fail_fast")

        assert isinstance(attempt.error, DataValidationFailed)
        assert isinstance(attempt.error.__cause__, FractionalValueNotAllowed)

    def test_invalid_org_node(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test an org node without digits aborts the load."""
        path = write_csv("LEVEL1ID,Q01,Q02,DEM_AGE\nunknown,3,2,3\n")
        attempt = load_dataset_from_csv(path, survey_schema, "fail_fast")

        assert isinstance(attempt.error, DataValidationFailed)
        assert attempt.error.data_error.column_name == "LEVEL1ID"


class TestCaptureAllErrors:
    """Tests for capture_all_errors mode."""

    def test_bad_row_collected(
        self, survey_schema: Schema, csv_with_bad_row_5: Path
    ) -> None:
        """Test one bad cell yields success with exactly one data error."""
        attempt = load_dataset_from_csv(csv_with_bad_row_5, survey_schema, CAPTURE)

        assert attempt.succeeded is True
        assert attempt.error is None
        assert attempt.status is LoadStatus.LOADED_WITH_ERRORS
        assert len(attempt.data_errors) == 1
        error = attempt.data_errors[0]
        assert error.line_num == 5
        assert error.column_name == "Q01"
        assert str(error).startswith("line 5 | column Q01 | ")

    def test_failed_rows_omitted(
        self, survey_schema: Schema, csv_with_bad_row_5: Path
    ) -> None:
        """Test rows with errors are left out of the dataset."""
        attempt = load_dataset_from_csv(csv_with_bad_row_5, survey_schema, CAPTURE)

        dataset = attempt.dataset
        assert dataset is not None
        assert dataset.line_numbers == [1, 2, 3, 4, 6]
        assert 5 not in dataset.org_nodes
        assert (5, "Q02") not in dataset.data

    def test_all_errors_collected(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test every bad cell in every row is reported, in scan order."""
        path = write_csv(
            "LEVEL1ID,Q01,Q02,DEM_AGE\n"
            "N01.1,abc,9,3\n"
            "N01.1,1,2,3\n"
            "N01.2,,2,2.5\n"
        )
        attempt = load_dataset_from_csv(path, survey_schema, CAPTURE)

        assert attempt.succeeded is True
        assert [(e.line_num, e.column_name) for e in attempt.data_errors] == [
            (1, "Q01"),
            (1, "Q02"),
            (3, "Q01"),
            (3, "DEM_AGE"),
        ]
        assert attempt.dataset is not None
        assert attempt.dataset.line_numbers == [2]

    def test_null_not_allowed_message(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test an empty cell in a non-nullable column is reported."""
        path = write_csv("LEVEL1ID,Q01,Q02,DEM_AGE\nN01.1,,2,3\n")
        attempt = load_dataset_from_csv(path, survey_schema, CAPTURE)

        assert len(attempt.data_errors) == 1
        assert "Empty value is not allowed" in attempt.data_errors[0].message

    def test_short_row(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test absent trailing fields count as empty cells."""
        path = write_csv("LEVEL1ID,Q01,Q02,DEM_AGE\nN01.1\nN01.2,1\n")
        attempt = load_dataset_from_csv(path, survey_schema, CAPTURE)

        assert attempt.succeeded is True
        assert [(e.line_num, e.column_name) for e in attempt.data_errors] == [(1, "Q01")]
        assert attempt.dataset is not None
        assert attempt.dataset.value(2, "Q02") is None
        assert attempt.dataset.value(2, "DEM_AGE") is None

    def test_calls_are_independent(
        self, survey_schema: Schema, csv_with_bad_row_5: Path
    ) -> None:
        """Test errors do not leak between load calls."""
        first = load_dataset_from_csv(csv_with_bad_row_5, survey_schema, CAPTURE)
        second = load_dataset_from_csv(csv_with_bad_row_5, survey_schema, CAPTURE)
        assert len(first.data_errors) == 1
        assert len(second.data_errors) == 1


class TestFatalErrors:
    """Tests for configuration, I/O and structural failures."""

    def test_missing_file(self, survey_schema: Schema, tmp_path: Path) -> None:
        """Test an unreadable file surfaces the I/O error."""
        attempt = load_dataset_from_csv(tmp_path / "nope.csv", survey_schema, CAPTURE)

        assert attempt.succeeded is False
        assert isinstance(attempt.error, FileNotFoundError)

    def test_row_longer_than_header(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test a row with more fields than the header is a fatal read error."""
        path = write_csv("LEVEL1ID,Q01,Q02,DEM_AGE\nN01.1,1,2,3,4\n")
        attempt = load_dataset_from_csv(path, survey_schema, CAPTURE)

        assert attempt.succeeded is False
        assert isinstance(attempt.error, pd.errors.ParserError)

    def test_empty_file(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test a file with no header row fails."""
        attempt = load_dataset_from_csv(write_csv(""), survey_schema, CAPTURE)
        assert isinstance(attempt.error, MissingHeaderRow)

    def test_invalid_schema_rejected(self, valid_csv: Path) -> None:
        """Test the loader validates the schema before reading."""
        schema = Schema("LEVEL1ID", (Column("Q01", "a", 1, 5), Column("Q01", "b", 1, 5)))
        attempt = load_dataset_from_csv(valid_csv, schema, CAPTURE)

        assert isinstance(attempt.error, DuplicateColumnCodes)

    def test_duplicate_header_columns(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test repeated header codes fail the load."""
        path = write_csv("LEVEL1ID,Q01,Q02,Q01,DEM_AGE\nN01.1,1,2,3,4\n")
        attempt = load_dataset_from_csv(path, survey_schema, CAPTURE)

        assert isinstance(attempt.error, DuplicateHeaderColumns)
        assert attempt.header is not None
        assert attempt.header.duplicate_columns == ("Q01",)

    def test_strict_header(
        self, survey_schema: Schema, write_csv: Callable[..., Path]
    ) -> None:
        """Test strict_header turns missing columns into a fatal error."""
        path = write_csv("Q01,Q02\n1,2\n")
        loader = CsvDatasetLoader(survey_schema, LoaderConfig(strict_header=True))
        attempt = loader.load(path, CAPTURE)

        assert isinstance(attempt.error, IncompleteHeader)
        assert "LEVEL1ID" in str(attempt.error)
        assert "DEM_AGE" in str(attempt.error)


class TestDatasetExport:
    """Tests for Dataset frame exports."""

    def test_to_frame(self, survey_schema: Schema, valid_csv: Path) -> None:
        """Test long-format export."""
        attempt = load_dataset_from_csv(valid_csv, survey_schema)
        assert attempt.dataset is not None
        df = attempt.dataset.to_frame()

        assert list(df.columns) == ["line_num", "org_node", "column", "value"]
        assert len(df) == 9
        row = df[(df["line_num"] == 3) & (df["column"] == "Q01")].iloc[0]
        assert row["org_node"] == "2.3.5"
        assert row["value"] == 3
        assert df["value"].isna().sum() == 2

    def test_to_wide_frame(self, survey_schema: Schema, valid_csv: Path) -> None:
        """Test wide export validates against the schema bounds."""
        attempt = load_dataset_from_csv(valid_csv, survey_schema)
        assert attempt.dataset is not None
        df = attempt.dataset.to_wide_frame()

        assert list(df.index) == [1, 2, 3]
        assert df.loc[2, "Q01"] == 5
        assert pd.isna(df.loc[2, "Q02"])
        assert df.loc[1, "LEVEL1ID"] == "1.1"

    def test_empty_dataset_frame(self, survey_schema: Schema) -> None:
        """Test exporting an empty dataset."""
        df = Dataset(schema=survey_schema).to_frame()
        assert df.empty


class TestDatasetLoadAttempt:
    """Tests for DatasetLoadAttempt status."""

    def test_status(self, survey_schema: Schema) -> None:
        """Test the three outcomes are distinguishable."""
        dataset = Dataset(schema=survey_schema)
        clean = DatasetLoadAttempt(succeeded=True, dataset=dataset)
        with_errors = DatasetLoadAttempt(
            succeeded=True,
            dataset=dataset,
            data_errors=(DataError(1, "Q01", "bad"),),
        )
        failed = DatasetLoadAttempt.failure(OSError("boom"))

        assert clean.status is LoadStatus.LOADED
        assert with_errors.status is LoadStatus.LOADED_WITH_ERRORS
        assert failed.status is LoadStatus.FAILED
        assert failed.dataset is None

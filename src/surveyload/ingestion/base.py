"""
Base class for survey dataset loaders.

The loader drives a strictly sequential scan: header reconciliation first,
then every data row cell by cell. Sources differ only in how raw rows are
read.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from surveyload.config.settings import LoaderConfig, ValidationMode
from surveyload.errors import (
    CellValueError,
    DataValidationFailed,
    DuplicateHeaderColumns,
    IncompleteHeader,
    InvalidOrgNodeString,
    SurveyLoadError,
)
from surveyload.ingestion.dataset import DataError, Dataset, DatasetLoadAttempt
from surveyload.ingestion.header import ParsedHeader, parse_header
from surveyload.normalization.org_node import OrgNode
from surveyload.normalization.values import convert_cell
from surveyload.schemas.column import Column
from surveyload.schemas.survey import Schema, validate_schema
from surveyload.utils.logging import get_logger, log_context

log = get_logger(__name__)

Row = Sequence[str]

# (position, code, column); column is None for the org node column
CellSpec = tuple[int, str, Column | None]


class DatasetLoader(ABC):
    """
    Abstract base class for survey dataset loaders.

    Subclasses implement _read_rows(); load() handles validation modes,
    header reconciliation and cell conversion.
    """

    def __init__(self, schema: Schema, options: LoaderConfig | None = None) -> None:
        """
        Initialize dataset loader.

        Args:
            schema: Survey schema the data must follow.
            options: Loader options; defaults apply when omitted.
        """
        self.schema = schema
        self.options = options or LoaderConfig()

    @abstractmethod
    def _read_rows(self, source: Path) -> list[list[str]]:
        """
        Read all raw rows, header first.

        Every row must have as many fields as the header. The source must
        be released before returning.

        Raises:
            MissingHeaderRow: If the source holds no rows.
            OSError: If the source cannot be read.
        """
        ...

    def load(
        self,
        source: str | Path,
        validation_mode: str | ValidationMode | None = None,
    ) -> DatasetLoadAttempt:
        """
        Load and validate a dataset.

        Fatal errors (invalid mode, invalid schema, I/O, header structure,
        or the first bad cell in fail-fast mode) are returned in the
        attempt's error field rather than raised.

        Args:
            source: Path to the data file.
            validation_mode: Overrides the configured validation mode.

        Returns:
            DatasetLoadAttempt describing the outcome.
        """
        raw_mode = self.options.validation_mode if validation_mode is None else validation_mode
        try:
            mode = ValidationMode.parse(raw_mode)
            validate_schema(self.schema)
        except SurveyLoadError as e:
            log.error("Invalid loader configuration", error=str(e))
            return DatasetLoadAttempt.failure(e)

        path = Path(source)
        with log_context(source=str(path), mode=mode.value):
            log.info("Loading dataset", loader=self.__class__.__name__)

            try:
                rows = self._read_rows(path)
            except SurveyLoadError as e:
                log.error("Dataset structure error", error=str(e))
                return DatasetLoadAttempt.failure(e)
            except (OSError, ValueError) as e:
                log.error("Failed to read dataset", error=f"{type(e).__name__}: {e!s}")
                return DatasetLoadAttempt.failure(e)

            header = parse_header(rows[0], self.schema)
            try:
                self._check_header(header)
            except SurveyLoadError as e:
                log.error("Header rejected", error=str(e))
                return DatasetLoadAttempt.failure(e, header=header)

            try:
                dataset, data_errors = self._scan_rows(rows[1:], header, mode)
            except DataValidationFailed as e:
                log.error("Aborting load on first data error", error=str(e))
                return DatasetLoadAttempt.failure(e, header=header)

            log.info(
                "Dataset loaded",
                rows=dataset.row_count,
                data_errors=len(data_errors),
            )
            return DatasetLoadAttempt(
                succeeded=True,
                dataset=dataset,
                data_errors=tuple(data_errors),
                header=header,
            )

    def _check_header(self, header: ParsedHeader) -> None:
        """
        Apply the header policy.

        Raises:
            DuplicateHeaderColumns: If any header code repeats.
            IncompleteHeader: If columns are missing and strict_header is set.
        """
        if header.duplicate_columns:
            msg = f"Duplicate header columns: {list(header.duplicate_columns)}"
            raise DuplicateHeaderColumns(msg)

        if header.is_complete and not header.extra_columns:
            log.debug("Header matches schema", columns=len(header.index_to_code))
            return

        log.warning(
            "Header differs from schema",
            org_col_found=header.org_col_found,
            missing=list(header.missing_columns),
            extra=list(header.extra_columns),
        )
        if self.options.strict_header and not header.is_complete:
            missing = list(header.missing_columns)
            if not header.org_col_found:
                missing.insert(0, self.schema.org_node_col)
            msg = f"Header is missing columns: {missing}"
            raise IncompleteHeader(msg)

    def _scan_rows(
        self,
        rows: Sequence[Row],
        header: ParsedHeader,
        mode: ValidationMode,
    ) -> tuple[Dataset, list[DataError]]:
        """
        Convert all data rows.

        Line numbers start at 1 for the first data row. Rows with any failed
        cell are left out of the dataset.

        Raises:
            DataValidationFailed: On the first bad cell in fail-fast mode.
        """
        cells = self._plan_cells(header)
        org_nodes: dict[int, OrgNode] = {}
        data: dict[tuple[int, str], int | None] = {}
        data_errors: list[DataError] = []

        for line_num, row in enumerate(rows, start=1):
            org_node, values, row_errors = self._scan_row(line_num, row, cells, mode)
            if row_errors:
                data_errors.extend(row_errors)
                continue
            if org_node is not None:
                org_nodes[line_num] = org_node
            for code, value in values.items():
                data[(line_num, code)] = value

        return Dataset(schema=self.schema, org_nodes=org_nodes, data=data), data_errors

    def _plan_cells(self, header: ParsedHeader) -> list[CellSpec]:
        """
        Resolve which header positions are converted, in header order.

        Extra and blank columns are left out. The org node column maps to
        None; schema columns map to their Column.
        """
        columns = {column.code: column for column in self.schema.columns}
        cells: list[CellSpec] = []
        for code, idx in header.code_to_index.items():
            if idx == header.org_col_pos:
                cells.append((idx, code, None))
            elif code in columns:
                cells.append((idx, code, columns[code]))
        return cells

    def _scan_row(
        self,
        line_num: int,
        row: Row,
        cells: Sequence[CellSpec],
        mode: ValidationMode,
    ) -> tuple[OrgNode | None, dict[str, int | None], list[DataError]]:
        """Convert one row; returns its org node, values, and cell errors."""
        org_node: OrgNode | None = None
        values: dict[str, int | None] = {}
        row_errors: list[DataError] = []

        for idx, code, column in cells:
            try:
                if column is None:
                    org_node = OrgNode.from_string(row[idx], self.options.org_node_separator)
                else:
                    values[code] = convert_cell(row[idx], column)
            except (CellValueError, InvalidOrgNodeString) as e:
                data_error = DataError(line_num=line_num, column_name=code, message=str(e))
                if mode is ValidationMode.FAIL_FAST:
                    raise DataValidationFailed(data_error) from e
                log.warning("Data error", line=line_num, column=code, error=str(e))
                row_errors.append(data_error)

        return org_node, values, row_errors

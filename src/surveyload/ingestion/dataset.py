"""
Loaded survey datasets and load outcomes.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

import pandas as pd

from surveyload.ingestion.header import ParsedHeader
from surveyload.normalization.org_node import OrgNode
from surveyload.schemas.output import DatasetRecordSchema, build_wide_schema
from surveyload.schemas.survey import Schema


@dataclass(frozen=True)
class DataError:
    """One cell-level validation failure."""

    line_num: int
    column_name: str
    message: str

    def __str__(self) -> str:
        return f"line {self.line_num} | column {self.column_name} | {self.message}"


@dataclass(frozen=True)
class Dataset:
    """
    Survey data converted against a schema.

    Keys are data row numbers (first data row is 1, header excluded).
    Only rows where every cell validated are present.
    """

    schema: Schema
    org_nodes: Mapping[int, OrgNode] = field(default_factory=dict)
    data: Mapping[tuple[int, str], int | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "org_nodes", MappingProxyType(dict(self.org_nodes)))
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @property
    def line_numbers(self) -> list[int]:
        """Data row numbers present in the dataset, ascending."""
        lines = set(self.org_nodes) | {line for line, _ in self.data}
        return sorted(lines)

    @property
    def row_count(self) -> int:
        """Number of rows loaded."""
        return len(self.line_numbers)

    def nodes(self) -> list[OrgNode]:
        """Distinct org nodes, in order of first appearance."""
        return list(dict.fromkeys(self.org_nodes[line] for line in sorted(self.org_nodes)))

    def value(self, line_num: int, code: str) -> int | None:
        """
        Get one converted value.

        Raises:
            KeyError: If the row or column was not loaded.
        """
        return self.data[(line_num, code)]

    def values_for(self, code: str) -> dict[int, int | None]:
        """All loaded values of one column, keyed by line number."""
        self.schema.column_by_code(code)
        return {line: v for (line, c), v in sorted(self.data.items()) if c == code}

    def to_frame(self) -> pd.DataFrame:
        """
        Export as a long-format frame, one row per (line, column).

        Returns:
            DataFrame validated against DatasetRecordSchema.
        """
        keys = sorted(self.data)
        org_nodes = [self.org_nodes.get(line) for line, _ in keys]
        df = pd.DataFrame(
            {
                "line_num": pd.Series([line for line, _ in keys], dtype="int64"),
                "org_node": pd.Series(
                    [str(n) if n is not None else None for n in org_nodes],
                    dtype="object",
                ),
                "column": pd.Series([code for _, code in keys], dtype="object"),
                "value": pd.array([self.data[k] for k in keys], dtype="Int64"),
            }
        )
        return DatasetRecordSchema.validate(df)

    def to_wide_frame(self) -> pd.DataFrame:
        """
        Export as a wide frame, one row per respondent indexed by line number.

        Returns:
            DataFrame validated against the schema's bounds and nullability.
        """
        lines = self.line_numbers
        frame: dict[str, object] = {
            self.schema.org_node_col: pd.Series(
                [str(self.org_nodes[line]) if line in self.org_nodes else None for line in lines],
                index=lines,
                dtype="object",
            )
        }
        for code in self.schema.column_codes():
            if not any((line, code) in self.data for line in lines):
                continue
            frame[code] = pd.Series(
                pd.array([self.data.get((line, code)) for line in lines], dtype="Int64"),
                index=lines,
            )
        df = pd.DataFrame(frame, index=pd.Index(lines, name="line_num"))
        return build_wide_schema(self.schema).validate(df)


class LoadStatus(str, Enum):
    """Overall outcome of a load."""

    LOADED = "loaded"
    LOADED_WITH_ERRORS = "loaded_with_errors"
    FAILED = "failed"


@dataclass(frozen=True)
class DatasetLoadAttempt:
    """
    Outcome of one load call.

    A failed attempt carries a single fatal error and no dataset. A
    successful attempt carries the dataset and, in capture-all mode, the
    collected data errors (empty when the input was fully valid).
    """

    succeeded: bool
    dataset: Dataset | None = None
    error: Exception | None = None
    data_errors: tuple[DataError, ...] = ()
    header: ParsedHeader | None = None

    @property
    def status(self) -> LoadStatus:
        """Distinguish clean loads, loads with data errors, and failures."""
        if not self.succeeded:
            return LoadStatus.FAILED
        if self.data_errors:
            return LoadStatus.LOADED_WITH_ERRORS
        return LoadStatus.LOADED

    @classmethod
    def failure(
        cls, error: Exception, header: ParsedHeader | None = None
    ) -> "DatasetLoadAttempt":
        """Build a failed attempt."""
        return cls(succeeded=False, error=error, header=header)

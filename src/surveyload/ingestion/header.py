"""
Header reconciliation.

Matches an observed CSV header row against a survey schema: which position
holds which code, where the org node column is, and which columns are
missing, extra, or repeated.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from surveyload.schemas.survey import Schema


@dataclass(frozen=True)
class ParsedHeader:
    """Result of reconciling one header row with a schema."""

    index_to_code: Mapping[int, str]
    code_to_index: Mapping[str, int]
    org_col_found: bool
    org_col_pos: int
    missing_columns: tuple[str, ...]
    extra_columns: tuple[str, ...]
    duplicate_columns: tuple[str, ...]

    @property
    def is_complete(self) -> bool:
        """Whether the org node column and every schema column are present."""
        return self.org_col_found and not self.missing_columns

    @property
    def has_discrepancies(self) -> bool:
        """Whether anything differs from the schema."""
        return not self.is_complete or bool(self.extra_columns or self.duplicate_columns)


def parse_header(header: Sequence[str], schema: Schema) -> ParsedHeader:
    """
    Reconcile a header row with a schema.

    Positions are significant. When a code repeats, its first position is
    kept in code_to_index and the code is listed in duplicate_columns.
    Blank names are never duplicates; they are listed once as "" in
    extra_columns.

    Args:
        header: Header row as read from the file.
        schema: Survey schema.

    Returns:
        Read-only ParsedHeader.
    """
    index_to_code: dict[int, str] = {}
    code_to_index: dict[str, int] = {}
    duplicate_columns: list[str] = []

    for i, code in enumerate(header):
        index_to_code[i] = code
        # Trailing delimiters in spreadsheet exports leave unnamed columns
        if not code.strip():
            continue
        if code in code_to_index:
            if code not in duplicate_columns:
                duplicate_columns.append(code)
            continue
        code_to_index[code] = i

    org_col_pos = code_to_index.get(schema.org_node_col, -1)

    missing_columns = [c for c in schema.column_codes() if c not in code_to_index]

    field_names = set(schema.all_field_names())
    extra_columns: list[str] = []
    for code in header:
        name = code if code.strip() else ""
        if name not in field_names and name not in extra_columns:
            extra_columns.append(name)

    return ParsedHeader(
        index_to_code=MappingProxyType(index_to_code),
        code_to_index=MappingProxyType(code_to_index),
        org_col_found=org_col_pos != -1,
        org_col_pos=org_col_pos,
        missing_columns=tuple(missing_columns),
        extra_columns=tuple(extra_columns),
        duplicate_columns=tuple(duplicate_columns),
    )

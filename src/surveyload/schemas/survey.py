"""
Survey schema: the expected shape of a survey table.

A schema names the column holding each respondent's org node and lists the
response columns in order.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from surveyload.errors import ColumnNotFound, DuplicateColumnCodes, EmptyOrgNodeColumn
from surveyload.schemas.column import Column
from surveyload.utils.collections import all_unique, duplicates
from surveyload.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Schema:
    """
    Declared shape of a survey dataset.

    Construction does not check invariants; run validate_schema() before
    using a schema for loading.
    """

    org_node_col: str
    columns: tuple[Column, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Freeze any list passed in
        object.__setattr__(self, "columns", tuple(self.columns))

    def column_by_code(self, code: str) -> Column:
        """
        Get a column by its code.

        Raises:
            ColumnNotFound: If no column has that code.
        """
        for column in self.columns:
            if column.code == code:
                return column
        msg = f"Column {code!r} not found in schema"
        raise ColumnNotFound(msg)

    def questions(self) -> list[Column]:
        """Question columns, in schema order."""
        return [c for c in self.columns if c.is_question]

    def demographics(self) -> list[Column]:
        """Demographic columns, in schema order."""
        return [c for c in self.columns if c.is_demographic]

    def column_codes(self) -> list[str]:
        """Codes of all columns, in schema order."""
        return [c.code for c in self.columns]

    def all_field_names(self) -> list[str]:
        """Org node column followed by all column codes."""
        return [self.org_node_col, *self.column_codes()]

    @classmethod
    def from_columns(cls, org_node_col: str, columns: Iterable[Column]) -> "Schema":
        """Build and validate a schema in one step."""
        schema = cls(org_node_col=org_node_col, columns=tuple(columns))
        validate_schema(schema)
        return schema


def validate_schema(schema: Schema) -> None:
    """
    Check schema-level invariants.

    Args:
        schema: Schema to check.

    Raises:
        EmptyOrgNodeColumn: If the org node column name is empty.
        DuplicateColumnCodes: If two columns share a code.
    """
    if not schema.org_node_col:
        msg = "Schema must name an org node column"
        raise EmptyOrgNodeColumn(msg)

    codes = schema.column_codes()
    if not all_unique(codes):
        repeated = duplicates(codes)
        msg = f"Duplicate column codes in schema: {repeated}"
        raise DuplicateColumnCodes(msg)

    log.debug(
        "Schema valid",
        org_node_col=schema.org_node_col,
        questions=len(schema.questions()),
        demographics=len(schema.demographics()),
    )

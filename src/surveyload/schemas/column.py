"""
Column definitions for survey datasets.

A column is one response field: a question or a demographic attribute,
holding integers within fixed bounds.
"""

from dataclasses import dataclass
from enum import Enum

from surveyload.errors import (
    EmptyColumnCode,
    EmptyColumnText,
    InvalidColumnType,
    MinValueGreaterThanMaxValue,
)


class ColumnType(str, Enum):
    """Role of a column in the survey."""

    QUESTION = "question"
    DEMOGRAPHIC = "demographic"


@dataclass(frozen=True)
class Column:
    """
    One field of a survey schema.

    Construction is the only validation gate; instances are immutable.

    Raises:
        EmptyColumnCode: If code is empty.
        EmptyColumnText: If text is empty.
        MinValueGreaterThanMaxValue: If min_value > max_value.
        InvalidColumnType: If column_type is not a ColumnType value.
    """

    code: str
    text: str
    min_value: int
    max_value: int
    nullable: bool = False
    column_type: ColumnType = ColumnType.QUESTION

    def __post_init__(self) -> None:
        if not self.code:
            msg = "Column code must not be empty"
            raise EmptyColumnCode(msg)
        if not self.text:
            msg = f"Column text must not be empty (column {self.code!r})"
            raise EmptyColumnText(msg)
        if self.min_value > self.max_value:
            msg = (
                f"Column {self.code!r}: min_value {self.min_value} "
                f"is greater than max_value {self.max_value}"
            )
            raise MinValueGreaterThanMaxValue(msg)

        try:
            column_type = ColumnType(self.column_type)
        except ValueError as e:
            valid = ", ".join(t.value for t in ColumnType)
            msg = (
                f"Column {self.code!r}: invalid column type "
                f"{self.column_type!r} (expected one of: {valid})"
            )
            raise InvalidColumnType(msg) from e
        # Accept plain strings; store the enum member
        object.__setattr__(self, "column_type", column_type)

    @property
    def is_question(self) -> bool:
        """Whether this column holds a survey question."""
        return self.column_type is ColumnType.QUESTION

    @property
    def is_demographic(self) -> bool:
        """Whether this column holds a demographic attribute."""
        return self.column_type is ColumnType.DEMOGRAPHIC

    def accepts(self, value: int | None) -> bool:
        """Check a converted value against nullability and bounds."""
        if value is None:
            return self.nullable
        return self.min_value <= value <= self.max_value

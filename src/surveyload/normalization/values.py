"""
Cell value conversion.

Survey responses are integers, but spreadsheet exports often render whole
numbers as "3.0". Such values are accepted; genuine fractions are not.
"""

import math

from surveyload.errors import (
    FractionalValueNotAllowed,
    NullNotAllowed,
    NumericParseError,
    SchemaMinMaxViolation,
)
from surveyload.schemas.column import Column


def convert_cell_value(raw: str) -> int:
    """
    Convert a raw cell string into an integer.

    The text is parsed as a float first, then required to be a whole number.

    Args:
        raw: Raw cell text.

    Returns:
        Integer value.

    Raises:
        NumericParseError: If the text is not a finite number.
        FractionalValueNotAllowed: If the number has a fractional part.
    """
    # float() also accepts digit grouping like "1_000"
    if "_" in raw:
        msg = f"Cannot parse {raw!r} as a number"
        raise NumericParseError(msg)

    try:
        number = float(raw)
    except ValueError as e:
        msg = f"Cannot parse {raw!r} as a number"
        raise NumericParseError(msg) from e

    if not math.isfinite(number):
        msg = f"Cannot parse {raw!r} as a finite number"
        raise NumericParseError(msg)

    value = int(number)
    if float(value) != number:
        msg = f"Fractional value {raw!r} is not allowed"
        raise FractionalValueNotAllowed(msg)

    return value


def is_null(raw: str) -> bool:
    """Whether a raw cell counts as empty."""
    return raw.strip() == ""


def convert_cell(raw: str, column: Column) -> int | None:
    """
    Convert a raw cell and check it against its column.

    Args:
        raw: Raw cell text.
        column: Target column.

    Returns:
        Integer value, or None for an empty cell in a nullable column.

    Raises:
        NullNotAllowed: If the cell is empty and the column is not nullable.
        NumericParseError: If the text is not a finite number.
        FractionalValueNotAllowed: If the number has a fractional part.
        SchemaMinMaxViolation: If the value is outside the column bounds.
    """
    if is_null(raw):
        if column.nullable:
            return None
        msg = f"Empty value is not allowed in column {column.code!r}"
        raise NullNotAllowed(msg)

    value = convert_cell_value(raw)
    if not column.accepts(value):
        msg = (
            f"Value {value} is outside [{column.min_value}, {column.max_value}] "
            f"for column {column.code!r}"
        )
        raise SchemaMinMaxViolation(msg)

    return value

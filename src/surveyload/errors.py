"""
Error taxonomy for survey dataset loading.

Configuration and structural errors are fatal for a load. Cell-level errors
are fatal or collected depending on the validation mode.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from surveyload.ingestion.dataset import DataError


class SurveyLoadError(Exception):
    """Base class for all surveyload errors."""


# Configuration errors


class ConfigurationError(SurveyLoadError, ValueError):
    """Invalid loader configuration, reported before any row is read."""


class InvalidSchemaValidationMode(ConfigurationError):
    """Validation mode is not one of the supported modes."""


class SchemaDefinitionError(ConfigurationError):
    """A column or schema definition violates its invariants."""


class EmptyColumnCode(SchemaDefinitionError):
    """Column code is empty."""


class EmptyColumnText(SchemaDefinitionError):
    """Column text is empty."""


class MinValueGreaterThanMaxValue(SchemaDefinitionError):
    """Column min_value is greater than its max_value."""


class InvalidColumnType(SchemaDefinitionError):
    """Column type is not a known column type."""


class EmptyOrgNodeColumn(SchemaDefinitionError):
    """Schema does not name an org node column."""


class DuplicateColumnCodes(SchemaDefinitionError):
    """Two or more schema columns share a code."""


class ColumnNotFound(SchemaDefinitionError, KeyError):
    """No column with the requested code exists in the schema."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


# Structural errors


class StructuralError(SurveyLoadError):
    """The header row cannot be reconciled with the schema."""


class MissingHeaderRow(StructuralError):
    """Input contains no header row."""


class DuplicateHeaderColumns(StructuralError):
    """Header row names the same column more than once."""


class IncompleteHeader(StructuralError):
    """Header lacks schema columns while strict header checking is on."""


# Value errors


class InvalidOrgNodeString(SurveyLoadError, ValueError):
    """Org node string cannot be parsed into levels."""


class CellValueError(SurveyLoadError, ValueError):
    """A single cell failed conversion or validation."""


class NumericParseError(CellValueError):
    """Cell text is not a finite number."""


class FractionalValueNotAllowed(CellValueError):
    """Cell holds a number with a fractional part."""


class NullNotAllowed(CellValueError):
    """Cell is empty but its column is not nullable."""


class SchemaMinMaxViolation(CellValueError):
    """Cell value is outside the column's min/max bounds."""


class DataValidationFailed(SurveyLoadError):
    """Fail-fast abort on the first cell error."""

    def __init__(self, data_error: "DataError") -> None:
        super().__init__(str(data_error))
        self.data_error = data_error

"""
Typed configuration models using Pydantic.

Survey schemas and loader options are declared in configuration and
converted into the domain model here.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from surveyload.errors import InvalidSchemaValidationMode
from surveyload.schemas.column import Column, ColumnType
from surveyload.schemas.survey import Schema, validate_schema


class ValidationMode(str, Enum):
    """Policy for cell-level data errors."""

    FAIL_FAST = "fail_fast"  # abort on the first bad cell
    CAPTURE_ALL_ERRORS = "capture_all_errors"  # scan everything, collect errors

    @classmethod
    def parse(cls, value: "str | ValidationMode") -> "ValidationMode":
        """
        Parse a validation mode.

        Raises:
            InvalidSchemaValidationMode: If value is not a known mode.
        """
        try:
            return cls(value)
        except ValueError as e:
            valid = ", ".join(m.value for m in cls)
            msg = f"Invalid schema validation mode {value!r} (expected one of: {valid})"
            raise InvalidSchemaValidationMode(msg) from e


class ColumnConfig(BaseModel):
    """Declaration of one survey column."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Unique column code as it appears in the header")
    text: str = Field(description="Human-readable question or attribute label")
    min_value: int = Field(description="Smallest allowed value")
    max_value: int = Field(description="Largest allowed value")
    nullable: bool = Field(default=False, description="Whether empty cells are allowed")
    type: ColumnType = Field(default=ColumnType.QUESTION, description="Column role")

    def to_column(self) -> Column:
        """Build the domain column."""
        return Column(
            code=self.code,
            text=self.text,
            min_value=self.min_value,
            max_value=self.max_value,
            nullable=self.nullable,
            column_type=self.type,
        )


class SchemaConfig(BaseModel):
    """Declaration of a survey schema."""

    model_config = ConfigDict(frozen=True)

    org_node_col: str = Field(description="Header name of the org node column")
    columns: list[ColumnConfig] = Field(default_factory=list)

    def to_schema(self) -> Schema:
        """
        Build and validate the domain schema.

        Raises:
            SchemaDefinitionError: If a column or the schema is invalid.
        """
        schema = Schema(
            org_node_col=self.org_node_col,
            columns=tuple(c.to_column() for c in self.columns),
        )
        validate_schema(schema)
        return schema


class LoaderConfig(BaseModel):
    """Dataset loader options."""

    model_config = ConfigDict(frozen=True)

    validation_mode: ValidationMode = Field(
        default=ValidationMode.FAIL_FAST,
        description="fail_fast or capture_all_errors",
    )
    org_node_separator: str = Field(default=".", description="Org node level separator")
    encoding: str = Field(default="utf-8", description="Input file encoding")
    delimiter: str = Field(default=",", description="CSV field delimiter")
    strict_header: bool = Field(
        default=False,
        description="Fail when the header lacks schema columns or the org node column",
    )

    @field_validator("org_node_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Ensure the separator can split digit runs."""
        if not v or any(ch.isdigit() for ch in v):
            msg = f"org_node_separator must be non-empty and contain no digits, got: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Ensure the delimiter is a single character."""
        if len(v) != 1:
            msg = f"delimiter must be a single character, got: {v!r}"
            raise ValueError(msg)
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, description="Emit JSON log lines")


class SurveyConfig(BaseModel):
    """Complete survey loading configuration."""

    model_config = ConfigDict(frozen=True)

    project: str = Field(description="Project identifier (e.g., 'pses-2024')")
    survey_schema: SchemaConfig
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def build_schema(self) -> Schema:
        """Build the validated domain schema."""
        return self.survey_schema.to_schema()

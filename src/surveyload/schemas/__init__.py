"""
Schema definitions for survey data.

The column/schema model describes the expected survey table; Pandera
schemas describe frames exported from loaded datasets.
"""

from surveyload.schemas.column import Column, ColumnType
from surveyload.schemas.output import DatasetRecordSchema, build_wide_schema
from surveyload.schemas.survey import Schema, validate_schema

__all__ = [
    "Column",
    "ColumnType",
    "DatasetRecordSchema",
    "Schema",
    "build_wide_schema",
    "validate_schema",
]

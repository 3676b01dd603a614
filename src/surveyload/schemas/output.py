"""
Pandera schemas for loaded dataset output.

Loaded datasets can be exported as pandas frames; these schemas are the
contract for those frames.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

from surveyload.schemas.survey import Schema


class DatasetRecordSchema(pa.DataFrameModel):
    """
    Schema for the long-format dataset export.

    One row per (respondent line, column) pair.
    """

    line_num: Series[int] = pa.Field(
        ge=1,
        description="Data row number (header excluded, first data row is 1)",
    )
    org_node: Series[str] = pa.Field(
        nullable=True,
        description="Dotted org node path of the respondent",
    )
    column: Series[str] = pa.Field(
        str_length={"min_value": 1},
        description="Schema column code",
    )
    value: Series[pd.Int64Dtype] = pa.Field(
        nullable=True,
        description="Converted integer response (null for empty nullable cells)",
    )

    class Config:
        """Schema configuration."""

        name = "DatasetRecordSchema"
        strict = True
        coerce = True


def build_wide_schema(schema: Schema) -> pa.DataFrameSchema:
    """
    Build a frame schema for the wide export of a survey schema.

    Each survey column becomes a nullable-integer frame column carrying the
    column's bounds and nullability.

    Args:
        schema: Validated survey schema.

    Returns:
        Pandera DataFrameSchema for wide frames indexed by line number.
    """
    columns = {
        column.code: pa.Column(
            pd.Int64Dtype(),
            checks=pa.Check.in_range(column.min_value, column.max_value),
            nullable=column.nullable,
            required=False,
            description=column.text,
        )
        for column in schema.columns
    }
    columns[schema.org_node_col] = pa.Column(str, nullable=True, required=False)

    return pa.DataFrameSchema(
        columns,
        name=f"WideSurveySchema[{schema.org_node_col}]",
        strict=True,
        coerce=True,
    )

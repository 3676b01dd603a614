"""
Configuration management with typed Pydantic models.

Declares the survey schema and loader options, loaded from YAML with
environment variable interpolation.
"""

from surveyload.config.loader import load_config
from surveyload.config.settings import (
    ColumnConfig,
    LoaderConfig,
    LoggingConfig,
    SchemaConfig,
    SurveyConfig,
    ValidationMode,
)

__all__ = [
    "ColumnConfig",
    "LoaderConfig",
    "LoggingConfig",
    "SchemaConfig",
    "SurveyConfig",
    "ValidationMode",
    "load_config",
]

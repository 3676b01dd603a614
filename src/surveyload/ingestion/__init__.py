"""
Survey dataset ingestion.

All raw survey data loading happens through this module so that header
reconciliation and cell validation are applied consistently.
"""

from surveyload.ingestion.base import DatasetLoader
from surveyload.ingestion.csv import CsvDatasetLoader, load_dataset_from_csv
from surveyload.ingestion.dataset import DataError, Dataset, DatasetLoadAttempt, LoadStatus
from surveyload.ingestion.header import ParsedHeader, parse_header

__all__ = [
    "CsvDatasetLoader",
    "DataError",
    "Dataset",
    "DatasetLoadAttempt",
    "DatasetLoader",
    "LoadStatus",
    "ParsedHeader",
    "load_dataset_from_csv",
    "parse_header",
]

"""Shared utilities: logging, hashing, sequence helpers."""

from surveyload.utils.collections import all_unique, duplicates
from surveyload.utils.hashing import file_md5_hash
from surveyload.utils.logging import configure_logging, get_logger, log_context

__all__ = [
    "all_unique",
    "configure_logging",
    "duplicates",
    "file_md5_hash",
    "get_logger",
    "log_context",
]

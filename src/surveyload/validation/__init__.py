"""Survey file validation and reporting."""

from surveyload.validation.core import ValidationResult, ValidationRunner
from surveyload.validation.reporter import ConsoleReporter

__all__ = ["ConsoleReporter", "ValidationResult", "ValidationRunner"]

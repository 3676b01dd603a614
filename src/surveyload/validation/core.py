"""
Validation runner for survey data files.

Ties configuration, file identity and the dataset loader together.
"""

from dataclasses import dataclass
from pathlib import Path

from surveyload.config.settings import SurveyConfig, ValidationMode
from surveyload.errors import SurveyLoadError
from surveyload.ingestion.csv import CsvDatasetLoader
from surveyload.ingestion.dataset import DatasetLoadAttempt, LoadStatus
from surveyload.utils.hashing import file_md5_hash
from surveyload.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a single survey file."""

    project: str
    file_path: Path
    exists: bool
    digest: str | None
    attempt: DatasetLoadAttempt | None
    error_message: str | None

    @property
    def status(self) -> LoadStatus:
        """Outcome of the load, FAILED when no load happened."""
        if self.attempt is None:
            return LoadStatus.FAILED
        return self.attempt.status

    @property
    def passed(self) -> bool:
        """Whether the file loaded without any data errors."""
        return self.status is LoadStatus.LOADED


class ValidationRunner:
    """
    Validates survey files against the configured schema.

    Never raises for missing or unreadable files; problems are reported in
    the ValidationResult.
    """

    def __init__(self, config: SurveyConfig) -> None:
        """
        Initialize validation runner.

        Args:
            config: Survey configuration containing schema and loader options.
        """
        self.config = config

    def run(
        self,
        csv_path: Path,
        validation_mode: str | ValidationMode | None = None,
    ) -> ValidationResult:
        """
        Validate one survey file.

        Args:
            csv_path: Path to the CSV file.
            validation_mode: Overrides the configured validation mode.

        Returns:
            ValidationResult for the file.
        """
        if not csv_path.exists():
            log.warning("Data file not found", path=str(csv_path))
            return ValidationResult(
                project=self.config.project,
                file_path=csv_path,
                exists=False,
                digest=None,
                attempt=None,
                error_message="File not found",
            )

        try:
            schema = self.config.build_schema()
        except SurveyLoadError as e:
            log.error("Invalid schema configuration", error=str(e))
            return ValidationResult(
                project=self.config.project,
                file_path=csv_path,
                exists=True,
                digest=None,
                attempt=DatasetLoadAttempt.failure(e),
                error_message=f"{type(e).__name__}: {e!s}",
            )

        try:
            digest = file_md5_hash(csv_path)
        except OSError as e:
            log.error("Could not hash data file", path=str(csv_path), error=str(e))
            digest = None

        loader = CsvDatasetLoader(schema, self.config.loader)
        attempt = loader.load(csv_path, validation_mode)

        error_message = None
        if attempt.error is not None:
            error_message = f"{type(attempt.error).__name__}: {attempt.error!s}"
        elif attempt.data_errors:
            error_message = f"{len(attempt.data_errors)} data error(s)"

        log.info(
            "Validation finished",
            path=str(csv_path),
            status=attempt.status.value,
            digest=digest,
        )
        return ValidationResult(
            project=self.config.project,
            file_path=csv_path,
            exists=True,
            digest=digest,
            attempt=attempt,
            error_message=error_message,
        )

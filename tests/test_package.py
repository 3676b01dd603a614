"""Basic package tests to verify installation."""


def test_package_imports() -> None:
    """Verify the main package can be imported."""
    import surveyload

    assert surveyload.__version__


def test_config_module_imports() -> None:
    """Verify config module structure is correct."""
    from surveyload.config import (
        ColumnConfig,
        LoaderConfig,
        LoggingConfig,
        SchemaConfig,
        SurveyConfig,
        ValidationMode,
        load_config,
    )

    assert ColumnConfig is not None
    assert LoaderConfig is not None
    assert LoggingConfig is not None
    assert SchemaConfig is not None
    assert SurveyConfig is not None
    assert ValidationMode is not None
    assert load_config is not None


def test_ingestion_module_imports() -> None:
    """Verify ingestion module structure is correct."""
    from surveyload.ingestion import (
        CsvDatasetLoader,
        DataError,
        Dataset,
        DatasetLoadAttempt,
        DatasetLoader,
        LoadStatus,
        ParsedHeader,
        load_dataset_from_csv,
        parse_header,
    )

    assert issubclass(CsvDatasetLoader, DatasetLoader)
    assert DataError is not None
    assert Dataset is not None
    assert DatasetLoadAttempt is not None
    assert LoadStatus is not None
    assert ParsedHeader is not None
    assert load_dataset_from_csv is not None
    assert parse_header is not None

"""Tests for custom exception hierarchy."""

from registry_sync.exceptions import (
    ConfigurationError,
    CsvFormatError,
    EntityNotFoundError,
    MirrorError,
    PersistenceError,
    ReferentialIntegrityError,
    RegistrySyncError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_registry_sync_error_is_exception(self) -> None:
        assert isinstance(RegistrySyncError("test"), Exception)

    def test_entity_not_found_is_registry_sync_error(self) -> None:
        assert isinstance(EntityNotFoundError("test"), RegistrySyncError)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, RegistrySyncError)

    def test_csv_format_error_is_registry_sync_error(self) -> None:
        assert isinstance(CsvFormatError("test"), RegistrySyncError)

    def test_configuration_error_is_registry_sync_error(self) -> None:
        assert isinstance(ConfigurationError("test"), RegistrySyncError)

    def test_storage_errors_are_registry_sync_errors(self) -> None:
        assert isinstance(PersistenceError("test"), RegistrySyncError)
        assert isinstance(MirrorError("test"), RegistrySyncError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("File F1 references owner X outside the batch")
        assert str(err) == "File F1 references owner X outside the batch"

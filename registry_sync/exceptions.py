"""Custom exception hierarchy for registry-sync."""


class RegistrySyncError(Exception):
    """Base exception for all registry-sync errors."""


class EntityNotFoundError(RegistrySyncError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a property file references an owner outside its batch."""


class CsvFormatError(RegistrySyncError):
    """Raised when an export file is malformed or has no data rows."""


class ConfigurationError(RegistrySyncError):
    """Raised when configuration is invalid or missing."""


class PersistenceError(RegistrySyncError):
    """Raised when the local store cannot read or write a collection."""


class MirrorError(RegistrySyncError):
    """Raised when the remote mirror cannot be reached or written."""

"""Configuration management for registry-sync."""

import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from registry_sync.exceptions import ConfigurationError


@dataclass
class LocalStoreConfig:
    """Durable local store location."""

    data_dir: Path = field(default_factory=lambda: Path(".registry"))
    namespace: str = "DIN_PORTAL"
    scope: str = "V3"

    @property
    def namespace_dir(self) -> Path:
        """Directory holding every collection of this namespace and scope."""
        return self.data_dir / f"{self.namespace}_{self.scope}"


@dataclass
class MirrorConfig:
    """Remote mirror (PostgreSQL) configuration.

    The mirror is disabled when ``dsn`` is not set.
    """

    dsn: str | None = None
    owners_table: str = "profiles"
    files_table: str = "property_files"

    @property
    def enabled(self) -> bool:
        """Whether the remote capability is available."""
        return self.dsn is not None

    def table_for(self, collection: str) -> str | None:
        """Map a logical collection name to its remote table, if mirrored."""
        return {"owners": self.owners_table, "files": self.files_table}.get(collection)


@dataclass
class SessionConfig:
    """Transient session marker location."""

    path: Path = field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "registry_sync" / "DIN_SESSION_USER.json"
    )


@dataclass
class IngestConfig:
    """Defaults applied while normalizing export rows."""

    placeholder_email_domain: str = "dinproperties.com.pk"
    default_owner_secret: str = "password123"
    default_owner_name: str = "SAP Member"
    default_text: str = "-"
    currency: str = "PKR"


@dataclass
class RegistryConfig:
    """Main configuration for registry-sync."""

    local: LocalStoreConfig = field(default_factory=LocalStoreConfig)
    mirror: MirrorConfig = field(default_factory=MirrorConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Create config from environment variables."""
        import os

        local = LocalStoreConfig(
            data_dir=Path(os.getenv("REGISTRY_DATA_DIR", ".registry")),
            namespace=os.getenv("REGISTRY_NAMESPACE", "DIN_PORTAL"),
            scope=os.getenv("REGISTRY_SCOPE", "V3"),
        )

        mirror = MirrorConfig(
            dsn=os.getenv("REGISTRY_POSTGRES_URL") or None,
            owners_table=os.getenv("REGISTRY_OWNERS_TABLE", "profiles"),
            files_table=os.getenv("REGISTRY_FILES_TABLE", "property_files"),
        )

        session_file = os.getenv("REGISTRY_SESSION_FILE")
        session = SessionConfig(
            path=Path(session_file)
            if session_file
            else Path(tempfile.gettempdir())
            / "registry_sync"
            / f"{local.namespace}_{local.scope}_SESSION.json"
        )

        ingest = IngestConfig(
            placeholder_email_domain=os.getenv("REGISTRY_EMAIL_DOMAIN", "dinproperties.com.pk"),
            default_owner_secret=os.getenv("REGISTRY_DEFAULT_SECRET", "password123"),
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"Unsupported LOG_FORMAT: {log_format}")

        return cls(
            local=local,
            mirror=mirror,
            session=session,
            ingest=ingest,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )

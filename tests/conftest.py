"""Pytest configuration and fixtures."""

from decimal import Decimal
from pathlib import Path

import pytest

from registry_sync.config import IngestConfig
from registry_sync.models import Owner, OwnerRole, PropertyFile, Transaction
from registry_sync.sinks.local import LocalStore
from registry_sync.sinks.session import SessionMarker
from registry_sync.store import RegistryStore


class RecordingMirror:
    """Mirror double that records upserts and serves canned tables."""

    def __init__(self, enabled: bool = True, tables: dict[str, list[dict]] | None = None) -> None:
        self.enabled = enabled
        self.tables = tables or {}
        self.upserts: list[tuple[str, list[dict]]] = []
        self.fetches: list[str] = []

    async def upsert(self, collection: str, records: list[dict]) -> bool:
        self.upserts.append((collection, records))
        return True

    async def fetch_all(self, collection: str) -> list[dict]:
        self.fetches.append(collection)
        return self.tables.get(collection, [])


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def local_store(tmp_path: Path) -> LocalStore:
    """Local store rooted in a temporary namespace directory."""
    return LocalStore(tmp_path / "DIN_PORTAL_V3")


@pytest.fixture
def session_marker(tmp_path: Path) -> SessionMarker:
    """Session marker in a temporary directory."""
    return SessionMarker(tmp_path / "session" / "DIN_SESSION_USER.json")


@pytest.fixture
def mirror() -> RecordingMirror:
    """Enabled recording mirror."""
    return RecordingMirror()


@pytest.fixture
def store(local_store: LocalStore, mirror: RecordingMirror, session_marker: SessionMarker) -> RegistryStore:
    """Empty store wired to temporary sinks."""
    return RegistryStore(local_store, mirror, session_marker, IngestConfig())


@pytest.fixture
def sample_owner() -> Owner:
    """Sample owner."""
    return Owner(
        id="user-1111122222223",
        cnic="11111-2222222-3",
        name="Sara Khan",
        email="1111122222223@dinproperties.com.pk",
        phone="0321-0000000",
    )


@pytest.fixture
def sample_admin() -> Owner:
    """Sample administrator."""
    return Owner(
        id="admin-test",
        cnic="99999-9999999-9",
        name="Admin",
        email="admin@test.com",
        phone="-",
        role=OwnerRole.ADMIN,
    )


@pytest.fixture
def sample_file() -> PropertyFile:
    """Sample property file with one ledger line."""
    return PropertyFile(
        file_no="F-100",
        owner_name="Sara Khan",
        owner_cnic="1111122222223",
        plot_value=Decimal("1000000"),
        balance=Decimal("600000"),
        payment_received=Decimal("400000"),
        transactions=[
            Transaction(
                seq=0,
                trans_id=1700000000000,
                item_code="F-100",
                amount_paid=Decimal("400000"),
                outstanding=Decimal("600000"),
            )
        ],
    )


@pytest.fixture
def scenario_csv() -> str:
    """Two ledger lines for one file, with separators and parentheses."""
    return (
        "ocnic,oname,itemcode,reconsum,balduedeb\n"
        "35202-1234567-1,Ali,F1,500,\"1,500.00\"\n"
        "35202-1234567-1,Ali,F1,300,(200)\n"
    )

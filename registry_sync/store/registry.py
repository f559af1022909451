"""In-memory registry with a persisted mutation API."""

from __future__ import annotations

import asyncio
import logging
from decimal import ROUND_FLOOR, Decimal
from typing import Any

from registry_sync.config import IngestConfig, RegistryConfig
from registry_sync.exceptions import EntityNotFoundError
from registry_sync.ingest.keys import normalize_identity
from registry_sync.ingest.merge import merge_files, merge_owners
from registry_sync.ingest.normalizer import IngestBatch, ingest_text, validate_batch
from registry_sync.models import (
    BROADCAST_RECEIVER,
    Message,
    Notice,
    Owner,
    OwnerRole,
    PropertyFile,
)
from registry_sync.seed import SEEDS
from registry_sync.sinks.local import LocalStore
from registry_sync.sinks.postgres import PostgresMirror
from registry_sync.sinks.serialization import to_records
from registry_sync.sinks.session import SessionMarker

logger = logging.getLogger(__name__)

COLLECTIONS = ("owners", "files", "notices", "messages")
MIRRORED = ("owners", "files")


class RegistryStore:
    """Single source of truth for the registry collections.

    Every mutation updates memory first, then awaits the local snapshot
    writes, then schedules best-effort mirror upserts. Mirror tasks run in
    the background; :meth:`flush` waits for them.
    """

    def __init__(
        self,
        local: LocalStore,
        mirror: PostgresMirror | None = None,
        session: SessionMarker | None = None,
        ingest_config: IngestConfig | None = None,
    ) -> None:
        self.local = local
        self.mirror = mirror
        self.session = session
        self.ingest_config = ingest_config or IngestConfig()
        self.ready = False

        self._collections: dict[str, list[Any]] = {name: [] for name in COLLECTIONS}
        self._current: Owner | None = None
        self._pending: set[asyncio.Task] = set()

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "RegistryStore":
        """Wire a store to the sinks described by ``config``."""
        return cls(
            local=LocalStore(config.local.namespace_dir),
            mirror=PostgresMirror(config.mirror),
            session=SessionMarker(config.session.path),
            ingest_config=config.ingest,
        )

    # Read-only views
    @property
    def owners(self) -> tuple[Owner, ...]:
        return tuple(self._collections["owners"])

    @property
    def files(self) -> tuple[PropertyFile, ...]:
        return tuple(self._collections["files"])

    @property
    def notices(self) -> tuple[Notice, ...]:
        return tuple(self._collections["notices"])

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._collections["messages"])

    @property
    def current_owner(self) -> Owner | None:
        return self._current

    @property
    def mirror_enabled(self) -> bool:
        return self.mirror is not None and self.mirror.enabled

    def find_owner(self, owner_id: str) -> Owner | None:
        """Return the owner with ``owner_id``, if any."""
        for owner in self._collections["owners"]:
            if owner.id == owner_id:
                return owner
        return None

    def owner_files(self, owner: Owner) -> list[PropertyFile]:
        """Files whose owner linkage matches the owner's identity number."""
        cnic = normalize_identity(owner.cnic)
        if not cnic:
            return []
        return [f for f in self._collections["files"] if normalize_identity(f.owner_cnic) == cnic]

    def portfolio_summary(self, owner: Owner) -> dict[str, Any]:
        """Totals across the owner's files.

        ``collection_index`` is the received share of received plus
        outstanding, as a percentage rounded half up.
        """
        received = Decimal("0")
        outstanding = Decimal("0")
        for prop in self.owner_files(owner):
            received += prop.payment_received
            outstanding += prop.balance
        total = received + outstanding
        index = 0
        if total > 0:
            index = (received / total * 100 + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
        return {
            "total_received": received,
            "total_outstanding": outstanding,
            "collection_index": int(index),
        }

    def registry_stats(self) -> dict[str, Any]:
        """Collected amount across all ledgers, outstanding across all files."""
        collection = Decimal("0")
        outstanding = Decimal("0")
        for prop in self._collections["files"]:
            for txn in prop.transactions:
                collection += txn.amount_paid
            outstanding += prop.balance
        return {
            "collection": collection,
            "outstanding": outstanding,
            "count": len(self._collections["files"]),
        }

    def visible_messages(self, owner: Owner) -> list[Message]:
        """Messages the owner may read; administrators see everything."""
        if owner.role == OwnerRole.ADMIN:
            return list(self._collections["messages"])
        return [
            m
            for m in self._collections["messages"]
            if m.receiver_id in (owner.id, BROADCAST_RECEIVER) or m.sender_id == owner.id
        ]

    def unread_count(self, owner: Owner) -> int:
        """Unread messages addressed directly to the owner."""
        return sum(
            1 for m in self.visible_messages(owner) if not m.is_read and m.receiver_id == owner.id
        )

    def summary(self) -> dict[str, int]:
        """Return summary counts of all collections."""
        return {name: len(items) for name, items in self._collections.items()}

    # Mutations
    def restore(self, name: str, items: list[Any]) -> None:
        """Set a collection without persisting it (bootstrap only)."""
        self._collections[name] = list(items)

    def restore_session(self, owner: Owner | None) -> None:
        """Set the active identity without touching the session marker."""
        self._current = owner

    async def replace_owners(self, owners: list[Owner]) -> None:
        """Replace the owner collection."""
        self._collections["owners"] = list(owners)
        await self._commit("owners")

    async def replace_files(self, files: list[PropertyFile]) -> None:
        """Replace the property file collection."""
        self._collections["files"] = list(files)
        await self._commit("files")

    async def replace_notices(self, notices: list[Notice]) -> None:
        """Replace the notice collection."""
        self._collections["notices"] = list(notices)
        await self._commit("notices")

    async def replace_messages(self, messages: list[Message]) -> None:
        """Replace the message collection."""
        self._collections["messages"] = list(messages)
        await self._commit("messages")

    async def register_owner(self, owner: Owner) -> None:
        """Append a newly registered owner."""
        self._collections["owners"].append(owner)
        await self._commit("owners")

    async def update_owner(self, owner: Owner) -> None:
        """Replace the owner with the same id, e.g. after a profile edit."""
        owners = self._collections["owners"]
        for idx, existing in enumerate(owners):
            if existing.id == owner.id:
                owners[idx] = owner
                break
        else:
            raise EntityNotFoundError(f"Owner {owner.id} not found")

        if self._current is not None and self._current.id == owner.id:
            self._current = owner
        await self._commit("owners")

    async def send_message(self, message: Message) -> None:
        """Prepend a message to the inbox collection."""
        self._collections["messages"].insert(0, message)
        await self._commit("messages")

    async def import_batch(self, batch: IngestBatch, destructive: bool = False) -> dict[str, int]:
        """Merge an ingested batch into the owner and file collections.

        Parameters
        ----------
        batch : IngestBatch
            Owners and files keyed by natural key.
        destructive : bool
            Replace both collections outright instead of merging by key.

        Returns
        -------
        dict[str, int]
            Collection sizes after the merge.
        """
        validate_batch(batch)
        self._collections["owners"] = merge_owners(
            self._collections["owners"], list(batch.owners.values()), destructive
        )
        self._collections["files"] = merge_files(
            self._collections["files"], list(batch.files.values()), destructive
        )
        logger.info(
            "%s import: %d owners, %d files in registry",
            "Destructive" if destructive else "Incremental",
            len(self._collections["owners"]),
            len(self._collections["files"]),
        )
        await self._commit("owners", "files")
        return {
            "owners": len(self._collections["owners"]),
            "files": len(self._collections["files"]),
        }

    async def ingest_csv(self, text: str, destructive: bool = False) -> dict[str, int]:
        """Parse, normalize and merge one export file.

        Raises
        ------
        CsvFormatError
            If the export is malformed; nothing is committed.
        """
        batch = ingest_text(text, self.ingest_config)
        result = await self.import_batch(batch, destructive=destructive)
        return {**batch.summary(), "registry_owners": result["owners"], "registry_files": result["files"]}

    async def factory_reset(self) -> None:
        """Wipe the local namespace and reload the seed collections.

        The active identity survives only if it is one of the seed owners.
        """
        await self.local.clear()
        for name, seed in SEEDS.items():
            self._collections[name] = seed()
        if self._current is not None:
            self._current = self.find_owner(self._current.id)
        logger.warning("Registry reset to factory defaults")

    def login(self, owner_id: str) -> Owner:
        """Make ``owner_id`` the active identity and record the session."""
        owner = self.find_owner(owner_id)
        if owner is None:
            raise EntityNotFoundError(f"Owner {owner_id} not found")
        self._current = owner
        if self.session is not None:
            self.session.save(owner.id)
        return owner

    def logout(self) -> None:
        """Drop the active identity and its session marker."""
        self._current = None
        if self.session is not None:
            self.session.clear()

    async def flush(self) -> None:
        """Wait for scheduled mirror upserts to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    async def _commit(self, *names: str) -> None:
        snapshots = {name: to_records(self._collections[name]) for name in names}
        for name, records in snapshots.items():
            await self.local.put(name, records)

        if not self.mirror_enabled:
            return
        for name, records in snapshots.items():
            if name in MIRRORED:
                task = asyncio.create_task(self.mirror.upsert(name, records))
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)

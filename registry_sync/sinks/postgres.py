"""PostgreSQL remote mirror for the owners and files collections."""

import logging
from typing import Callable

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb

from registry_sync.config import MirrorConfig
from registry_sync.exceptions import MirrorError
from registry_sync.ingest.keys import file_key, owner_key

logger = logging.getLogger(__name__)

KEY_FUNCTIONS: dict[str, Callable[[dict], str]] = {
    "owners": owner_key,
    "files": file_key,
}

CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS {table} (
    natural_key TEXT PRIMARY KEY,
    record JSONB NOT NULL,
    synced_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

UPSERT = """
INSERT INTO {table} (natural_key, record, synced_at)
VALUES (%s, %s, now())
ON CONFLICT (natural_key) DO UPDATE
SET record = EXCLUDED.record, synced_at = EXCLUDED.synced_at
"""

SELECT_ALL = "SELECT record FROM {table} ORDER BY synced_at, natural_key"


class PostgresMirror:
    """Best-effort mirror of registry collections to PostgreSQL tables.

    Each mirrored collection lives in its own table keyed by the record's
    natural key, with the full record stored as JSONB. The capability flag
    is resolved once from the configuration; when disabled every call is a
    no-op. Public methods never raise.
    """

    def __init__(self, config: MirrorConfig) -> None:
        self.config = config
        self.enabled = config.enabled

    def _table(self, collection: str) -> sql.Identifier:
        table = self.config.table_for(collection)
        if table is None:
            raise MirrorError(f"Collection {collection} is not mirrored")
        return sql.Identifier(table)

    async def upsert(self, collection: str, records: list[dict]) -> bool:
        """Merge ``records`` into the collection's table by natural key.

        Returns
        -------
        bool
            True when the batch was written.
        """
        if not self.enabled:
            return False
        try:
            count = await self._upsert(collection, records)
        except (MirrorError, psycopg.Error, OSError) as e:
            logger.error("Sync failure for %s: %s", collection, e, extra={"extra": {"collection": collection}})
            return False
        logger.info(
            "Mirrored %d %s records", count, collection, extra={"extra": {"collection": collection, "count": count}}
        )
        return True

    async def fetch_all(self, collection: str) -> list[dict]:
        """Return every record of the collection's table (empty on failure)."""
        if not self.enabled:
            return []
        try:
            return await self._fetch_all(collection)
        except (MirrorError, psycopg.Error, OSError) as e:
            logger.error(
                "Could not fetch %s from mirror: %s", collection, e, extra={"extra": {"collection": collection}}
            )
            return []

    async def create_tables(self) -> None:
        """Create the mirror tables if they do not exist."""
        if not self.enabled:
            logger.warning("Remote mirror is not configured; nothing to create")
            return
        async with await psycopg.AsyncConnection.connect(self.config.dsn) as conn:
            async with conn.cursor() as cur:
                for collection in KEY_FUNCTIONS:
                    query = sql.SQL(CREATE_TABLE).format(table=self._table(collection))
                    await cur.execute(query)
        logger.info("Mirror tables ready")

    async def _upsert(self, collection: str, records: list[dict]) -> int:
        key_fn = KEY_FUNCTIONS.get(collection)
        if key_fn is None:
            raise MirrorError(f"Collection {collection} is not mirrored")
        params = []
        for record in records:
            key = key_fn(record)
            if not key:
                logger.debug("Skipping %s record without natural key", collection)
                continue
            params.append((key, Jsonb(record)))
        if not params:
            return 0

        query = sql.SQL(UPSERT).format(table=self._table(collection))
        async with await psycopg.AsyncConnection.connect(self.config.dsn) as conn:
            async with conn.cursor() as cur:
                await cur.executemany(query, params)
        return len(params)

    async def _fetch_all(self, collection: str) -> list[dict]:
        query = sql.SQL(SELECT_ALL).format(table=self._table(collection))
        async with await psycopg.AsyncConnection.connect(self.config.dsn) as conn:
            async with conn.cursor() as cur:
                await cur.execute(query)
                rows = await cur.fetchall()
        return [row[0] for row in rows]

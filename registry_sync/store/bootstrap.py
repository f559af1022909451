"""Startup sequence resolving the registry's initial state."""

from __future__ import annotations

import logging

from registry_sync.config import RegistryConfig
from registry_sync.seed import SEEDS
from registry_sync.sinks.serialization import from_records
from registry_sync.store.registry import COLLECTIONS, MIRRORED, RegistryStore

logger = logging.getLogger(__name__)


async def bootstrap(store: RegistryStore) -> RegistryStore:
    """Load local snapshots, restore the session, overlay the mirror.

    Collections missing from the local store fall back to the seed data.
    A non-empty remote table replaces its collection outright. Any failing
    step is logged and skipped; the store is always marked ready.
    """
    for name in COLLECTIONS:
        try:
            records = await store.local.get(name)
            if records is None:
                store.restore(name, SEEDS[name]())
                logger.info("No local %s snapshot; using defaults", name)
            else:
                store.restore(name, from_records(name, records))
        except Exception as e:
            logger.warning("Could not load local %s, using defaults: %s", name, e)
            store.restore(name, SEEDS[name]())

    try:
        if store.session is not None:
            owner_id = store.session.load()
            if owner_id:
                owner = store.find_owner(owner_id)
                store.restore_session(owner)
                if owner is None:
                    logger.info("Session owner %s no longer exists", owner_id)
    except Exception as e:
        logger.warning("Could not restore session: %s", e)

    if store.mirror_enabled:
        for name in MIRRORED:
            try:
                records = await store.mirror.fetch_all(name)
                if records:
                    store.restore(name, from_records(name, records))
                    logger.info("Loaded %d %s from remote mirror", len(records), name)
            except Exception as e:
                logger.warning("Remote overlay of %s failed: %s", name, e)

    store.ready = True
    logger.info("Registry ready: %s", store.summary())
    return store


async def open_registry(config: RegistryConfig | None = None) -> RegistryStore:
    """Build a store from configuration and bootstrap it."""
    config = config or RegistryConfig.from_env()
    return await bootstrap(RegistryStore.from_config(config))

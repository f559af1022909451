"""Merge freshly ingested collections into existing ones by natural key."""

from __future__ import annotations

from registry_sync.ingest.keys import normalize_identity
from registry_sync.models import Owner, PropertyFile


def merge_by_key(existing: list, incoming: list, key) -> list:
    """Overlay ``incoming`` on ``existing``, last write wins per key.

    Entities are replaced whole; no field-level merge. Existing keys keep
    their position, new keys follow in incoming order.
    """
    merged = {key(item): item for item in existing}
    for item in incoming:
        merged[key(item)] = item
    return list(merged.values())


def merge_owners(existing: list[Owner], incoming: list[Owner], destructive: bool = False) -> list[Owner]:
    """Combine owner collections keyed by normalized identity number."""
    if destructive:
        return list(incoming)
    return merge_by_key(existing, incoming, lambda o: normalize_identity(o.cnic))


def merge_files(
    existing: list[PropertyFile],
    incoming: list[PropertyFile],
    destructive: bool = False,
) -> list[PropertyFile]:
    """Combine property file collections keyed by file number."""
    if destructive:
        return list(incoming)
    return merge_by_key(existing, incoming, lambda f: f.file_no)

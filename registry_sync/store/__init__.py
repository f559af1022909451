"""Registry state and its startup sequence."""

from registry_sync.store.bootstrap import bootstrap, open_registry
from registry_sync.store.registry import COLLECTIONS, MIRRORED, RegistryStore

__all__ = ["COLLECTIONS", "MIRRORED", "RegistryStore", "bootstrap", "open_registry"]

"""Persistence targets for registry collections."""

from registry_sync.sinks.local import LocalStore
from registry_sync.sinks.postgres import PostgresMirror
from registry_sync.sinks.session import SessionMarker

__all__ = ["LocalStore", "PostgresMirror", "SessionMarker"]

"""Durable local key-value store for registry collections."""

import asyncio
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from registry_sync.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class LocalStore:
    """Persist named collection snapshots as JSON files.

    One file per collection under the namespace directory. A ``put`` writes a
    temporary file and renames it over the previous snapshot, so each key is
    replaced atomically. Public methods never raise: failures are logged and
    the in-memory state stays authoritative.
    """

    def __init__(self, namespace_dir: str | Path, pretty: bool = False) -> None:
        """Initialize local store.

        Parameters
        ----------
        namespace_dir : str | Path
            Directory holding the collection files.
        pretty : bool
            Pretty-print JSON snapshots.
        """
        self.namespace_dir = Path(namespace_dir)
        self.pretty = pretty

    def _path(self, name: str) -> Path:
        return self.namespace_dir / f"{name}.json"

    async def put(self, name: str, value: Any) -> bool:
        """Replace the snapshot stored under ``name``.

        Returns
        -------
        bool
            True when the snapshot was written.
        """
        try:
            await asyncio.to_thread(self._write, name, value)
        except PersistenceError as e:
            logger.error("Persistence failure for %s: %s", name, e, extra={"extra": {"collection": name}})
            return False
        logger.debug("Persisted collection %s", name)
        return True

    async def get(self, name: str) -> Any | None:
        """Return the last snapshot stored under ``name``, or None."""
        try:
            return await asyncio.to_thread(self._read, name)
        except PersistenceError as e:
            logger.error("Could not load %s: %s", name, e, extra={"extra": {"collection": name}})
            return None

    async def clear(self) -> None:
        """Remove every snapshot in the namespace."""
        try:
            await asyncio.to_thread(self._clear)
        except PersistenceError as e:
            logger.error("Could not clear %s: %s", self.namespace_dir, e)

    def _write(self, name: str, value: Any) -> None:
        try:
            payload = json.dumps(
                value,
                indent=2 if self.pretty else None,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"{name} is not JSON-serializable: {e}") from e

        try:
            self.namespace_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.namespace_dir, prefix=f".{name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self._path(name))
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(str(e)) from e

    def _read(self, name: str) -> Any | None:
        path = self._path(name)
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            raise PersistenceError(f"{path}: {e}") from e

    def _clear(self) -> None:
        try:
            if self.namespace_dir.exists():
                shutil.rmtree(self.namespace_dir)
        except OSError as e:
            raise PersistenceError(str(e)) from e

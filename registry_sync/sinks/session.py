"""Transient session marker for fast identity restore."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class SessionMarker:
    """Remember the authenticated owner's id until logout."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, owner_id: str) -> None:
        """Record ``owner_id`` as the active session identity."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"id": owner_id}), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write session marker %s: %s", self.path, e)

    def load(self) -> str | None:
        """Return the recorded owner id, or None if there is no session."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session marker %s: %s", self.path, e)
            return None
        if not isinstance(data, dict):
            return None
        return data.get("id")

    def clear(self) -> None:
        """Forget the session."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove session marker %s: %s", self.path, e)

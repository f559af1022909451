"""Natural-key derivation shared by ingestion, merge and the mirror."""

import re

_NON_IDENTITY = re.compile(r"[^0-9X]")


def normalize_identity(raw: str | None) -> str:
    """Normalize a national identity number to its natural-key form.

    Upper-cases, then drops every character that is not a digit or the
    terminal check letter ``X``: ``"35202-1234567-x"`` -> ``"352021234567X"``.
    """
    if not raw:
        return ""
    return _NON_IDENTITY.sub("", raw.upper())


def owner_key(record: dict) -> str:
    """Natural key of an owner record."""
    return normalize_identity(record.get("cnic"))


def file_key(record: dict) -> str:
    """Natural key of a property file record."""
    return record.get("file_no") or ""

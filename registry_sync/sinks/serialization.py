"""Shared serialization utilities for the local store and the remote mirror."""

from dataclasses import asdict, fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable

from registry_sync.models import Message, Notice, Owner, PropertyFile, Transaction


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def to_records(items: list[Any]) -> list[dict]:
    """Serialize a collection snapshot to JSON-compatible records."""
    return [to_dict(item) for item in items]


def _to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def _from_dict(cls: type, data: dict) -> Any:
    """Build a flat dataclass from a record, ignoring unknown keys."""
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if f.type is Decimal:
            value = _to_decimal(value)
        elif f.type is int and value is not None:
            value = int(value)
        elif isinstance(f.type, type) and issubclass(f.type, Enum):
            value = f.type(value)
        kwargs[f.name] = value
    return cls(**kwargs)


def owner_from_dict(data: dict) -> Owner:
    """Decode an owner record."""
    return _from_dict(Owner, data)


def transaction_from_dict(data: dict) -> Transaction:
    """Decode a transaction record."""
    return _from_dict(Transaction, data)


def property_file_from_dict(data: dict) -> PropertyFile:
    """Decode a property file record, including its transactions."""
    flat = {k: v for k, v in data.items() if k != "transactions"}
    prop = _from_dict(PropertyFile, flat)
    prop.transactions = [transaction_from_dict(t) for t in data.get("transactions") or []]
    return prop


def notice_from_dict(data: dict) -> Notice:
    """Decode a notice record."""
    return _from_dict(Notice, data)


def message_from_dict(data: dict) -> Message:
    """Decode a message record."""
    return _from_dict(Message, data)


DECODERS: dict[str, Callable[[dict], Any]] = {
    "owners": owner_from_dict,
    "files": property_file_from_dict,
    "notices": notice_from_dict,
    "messages": message_from_dict,
}


def from_records(collection: str, records: list[dict]) -> list[Any]:
    """Decode a persisted collection snapshot by its logical name."""
    decoder = DECODERS[collection]
    return [decoder(record) for record in records]

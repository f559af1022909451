"""Registry entity models."""

from registry_sync.models.content import BROADCAST_RECEIVER, Message, Notice
from registry_sync.models.enums import OwnerRole, OwnerStatus
from registry_sync.models.owner import Owner
from registry_sync.models.property_file import PropertyFile
from registry_sync.models.transaction import Transaction

__all__ = [
    "BROADCAST_RECEIVER",
    "Message",
    "Notice",
    "Owner",
    "OwnerRole",
    "OwnerStatus",
    "PropertyFile",
    "Transaction",
]

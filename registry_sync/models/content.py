"""Notice and message models.

These records are persisted verbatim and take no part in reconciliation.
"""

from dataclasses import dataclass

BROADCAST_RECEIVER = "ALL"


@dataclass
class Notice:
    """Public notice shown to every owner."""

    id: str
    title: str
    content: str
    date: str
    category: str = "General"


@dataclass
class Message:
    """Direct or broadcast message between owners and administrators."""

    id: str
    sender_id: str
    receiver_id: str  # Owner id, or BROADCAST_RECEIVER
    content: str
    timestamp: str
    is_read: bool = False
    subject: str = ""

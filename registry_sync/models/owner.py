"""Owner model for the property registry."""

from dataclasses import dataclass

from registry_sync.models.enums import OwnerRole, OwnerStatus


@dataclass
class Owner:
    """Registered property owner.

    ``cnic`` is kept as supplied; its normalized form is the natural key.
    """

    id: str
    cnic: str
    name: str
    email: str
    phone: str
    role: OwnerRole = OwnerRole.CLIENT
    status: OwnerStatus = OwnerStatus.ACTIVE
    password: str = ""

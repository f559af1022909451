"""Enumeration types for registry entities."""

from enum import Enum


class OwnerRole(str, Enum):
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"


class OwnerStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"

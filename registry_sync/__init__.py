"""Offline-first property registry synchronization and CSV reconciliation."""

__version__ = "0.1.0"

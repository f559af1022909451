"""Synthetic data generators for demos and tests."""

from registry_sync.generators.export import ExportGenerator

__all__ = ["ExportGenerator"]

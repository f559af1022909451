"""Export ingestion: parsing, normalization and merge."""

from registry_sync.ingest.csv_parser import FIELD_ALIASES, ParsedExport, parse_export
from registry_sync.ingest.keys import normalize_identity
from registry_sync.ingest.merge import merge_files, merge_owners
from registry_sync.ingest.normalizer import (
    ExportNormalizer,
    IngestBatch,
    ingest_text,
    parse_amount,
    validate_batch,
)

__all__ = [
    "FIELD_ALIASES",
    "ExportNormalizer",
    "IngestBatch",
    "ParsedExport",
    "ingest_text",
    "merge_files",
    "merge_owners",
    "normalize_identity",
    "parse_amount",
    "parse_export",
    "validate_batch",
]

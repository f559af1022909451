#!/usr/bin/env python3
"""Administer the local property registry.

Commands:
- import: reconcile an accounting-system export CSV into the registry
- reset: wipe the local store back to factory defaults
- stats: print collection counts and ledger totals
- create-tables: provision the remote mirror tables

Storage locations and the optional PostgreSQL mirror are read from the
environment (see ``RegistryConfig.from_env``).
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from registry_sync.config import RegistryConfig
from registry_sync.exceptions import CsvFormatError
from registry_sync.logging import setup_logging
from registry_sync.sinks.postgres import PostgresMirror
from registry_sync.store import RegistryStore, open_registry

logger = logging.getLogger(__name__)


def print_summary(store: RegistryStore) -> None:
    """Print collection counts and ledger totals."""
    stats = store.registry_stats()
    print("\n" + "=" * 60)
    print("Registry Summary")
    print("=" * 60)
    for name, count in store.summary().items():
        print(f"  {name}: {count}")
    print(f"  collection: {stats['collection']:,}")
    print(f"  outstanding: {stats['outstanding']:,}")
    print(f"  remote mirror: {'enabled' if store.mirror_enabled else 'disabled'}")


async def run_import(config: RegistryConfig, csv_path: Path, destructive: bool) -> int:
    """Ingest one export file."""
    store = await open_registry(config)
    try:
        text = csv_path.read_text(encoding="utf-8")
        result = await store.ingest_csv(text, destructive=destructive)
    except (CsvFormatError, OSError, UnicodeDecodeError) as e:
        logger.error("Could not import %s: %s", csv_path, e)
        return 1
    await store.flush()
    logger.info("Import complete: %s", result)
    print_summary(store)
    return 0


async def run_reset(config: RegistryConfig) -> int:
    """Restore factory defaults."""
    store = await open_registry(config)
    await store.factory_reset()
    print_summary(store)
    return 0


async def run_stats(config: RegistryConfig) -> int:
    """Print the registry summary."""
    store = await open_registry(config)
    print_summary(store)
    return 0


async def run_create_tables(config: RegistryConfig) -> int:
    """Provision the mirror tables."""
    if not config.mirror.enabled:
        logger.error("REGISTRY_POSTGRES_URL is not set")
        return 1
    await PostgresMirror(config.mirror).create_tables()
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Administer the local property registry")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Reconcile an export CSV into the registry")
    import_parser.add_argument("csv", type=Path, help="Path to the export file")
    import_parser.add_argument(
        "--destructive",
        action="store_true",
        help="Replace owners and files instead of merging by natural key",
    )

    subparsers.add_parser("reset", help="Wipe the local store and reload factory defaults")
    subparsers.add_parser("stats", help="Print collection counts and ledger totals")
    subparsers.add_parser("create-tables", help="Create the remote mirror tables")

    args = parser.parse_args()

    config = RegistryConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    if args.command == "import":
        code = asyncio.run(run_import(config, args.csv, args.destructive))
    elif args.command == "reset":
        code = asyncio.run(run_reset(config))
    elif args.command == "stats":
        code = asyncio.run(run_stats(config))
    else:
        code = asyncio.run(run_create_tables(config))
    sys.exit(code)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Generate a synthetic accounting-system export for manual testing.

The file imitates the vendor's CSV quirks so it can be fed straight into
``registry_admin.py import``.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from registry_sync.generators import ExportGenerator


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate a synthetic registry export CSV")
    parser.add_argument("--owners", type=int, default=20, help="Number of owners (default: 20)")
    parser.add_argument("--files-per-owner", type=int, default=2, help="Files per owner (default: 2)")
    parser.add_argument("--lines-per-file", type=int, default=3, help="Ledger lines per file (default: 3)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--clean", action="store_true", help="Disable formatting noise")
    parser.add_argument("--bom", action="store_true", help="Prefix a UTF-8 byte-order marker")
    parser.add_argument("--output", type=Path, default=Path("local/export.csv"), help="Output file")
    args = parser.parse_args()

    generator = ExportGenerator(seed=args.seed, messy=not args.clean)
    text = generator.generate_csv(
        args.owners,
        files_per_owner=args.files_per_owner,
        lines_per_file=args.lines_per_file,
        bom=args.bom,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text, encoding="utf-8", newline="")
    print(f"Saved {len(generator.records)} ledger lines to {args.output}")


if __name__ == "__main__":
    main()

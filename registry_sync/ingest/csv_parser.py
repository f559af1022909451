"""Tolerant parser for accounting-system export files.

Exports come from an external system whose column names drift between
versions, so each logical field is located through an ordered list of
header aliases. Fields with no matching header are simply absent.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from registry_sync.exceptions import CsvFormatError

logger = logging.getLogger(__name__)

BOM = "\ufeff"
DELIMITER = ","
QUOTE = '"'

_LINE_BREAK = re.compile(r"\r?\n")

# Logical field -> accepted header names, first match wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "cnic": ("ocnic", "cnic", "u_ocnic"),
    "owner_name": ("oname", "ownername", "name"),
    "phone": ("ocell", "cellno"),
    "item_code": ("itemcode", "item_code", "u_itemcode"),
    "currency_no": ("currencyno", "currency"),
    "plot_size": ("dscription", "description", "size"),
    "doc_total": ("doctotal",),
    "paid": ("reconsum", "paid"),
    "outstanding": ("balduedeb", "balance"),
    "father_name": ("ofatname", "fathername"),
    "reg_date": ("otrfdate", "regdate"),
    "address": ("opraddress", "address"),
    "plot_no": ("plot", "plotno", "u_plotno"),
    "block": ("block", "u_block"),
    "park": ("park", "u_park"),
    "corner": ("corner", "u_corner"),
    "main_boulevard": ("mb", "mainboulevard", "u_mainbu"),
    "due_date": ("duedate",),
    "receivable": ("receivable",),
    "installment_no": ("u_intno",),
    "installment_name": ("u_intname",),
    "receipt_date": ("refdate",),
    "mode": ("mode",),
    "surcharge": ("markup", "surcharge"),
}


def split_line(line: str, delimiter: str = DELIMITER) -> list[str]:
    """Split one line into trimmed cells.

    A quote toggles the in-quotes state and is dropped from the output, so a
    quoted cell may contain the delimiter. Line breaks inside quotes are not
    supported: the input is split into lines first.
    """
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    cells.append("".join(current).strip())
    return cells


def resolve_columns(
    headers: list[str],
    aliases: dict[str, tuple[str, ...]] = FIELD_ALIASES,
) -> dict[str, int]:
    """Map each logical field to its column index.

    Fields with no matching header are left out of the result.
    """
    normalized = [h.strip().lower() for h in headers]
    columns: dict[str, int] = {}
    for name, candidates in aliases.items():
        for candidate in candidates:
            candidate = candidate.lower()
            if candidate in normalized:
                columns[name] = normalized.index(candidate)
                break
    return columns


@dataclass
class ExportRow:
    """One data row with alias-resolved access to its cells."""

    ordinal: int  # 0-based position among non-empty data lines
    cells: list[str]
    columns: dict[str, int]

    def get(self, name: str) -> str | None:
        """Return the trimmed cell for a logical field, or None if absent."""
        index = self.columns.get(name)
        if index is None or index >= len(self.cells):
            return None
        return self.cells[index].strip()


@dataclass
class ParsedExport:
    """Header and data rows of one export file."""

    headers: list[str]
    columns: dict[str, int]
    rows: list[ExportRow] = field(default_factory=list)

    @property
    def missing_fields(self) -> list[str]:
        """Logical fields that no header matched."""
        return [name for name in FIELD_ALIASES if name not in self.columns]


def parse_export(text: str, aliases: dict[str, tuple[str, ...]] = FIELD_ALIASES) -> ParsedExport:
    """Parse raw export text.

    Raises
    ------
    CsvFormatError
        If there is no header row followed by at least one data row.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    lines = [line for line in _LINE_BREAK.split(text) if line.strip() != ""]
    if len(lines) < 2:
        raise CsvFormatError("Export must contain a header row and at least one data row")

    headers = split_line(lines[0])
    columns = resolve_columns(headers, aliases)
    rows = [
        ExportRow(ordinal=idx, cells=split_line(line), columns=columns)
        for idx, line in enumerate(lines[1:])
    ]

    parsed = ParsedExport(headers=headers, columns=columns, rows=rows)
    if parsed.missing_fields:
        logger.debug("Export has no column for: %s", ", ".join(parsed.missing_fields))
    return parsed

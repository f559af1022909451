"""Map parsed export rows to owners, property files and ledger lines."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from registry_sync.config import IngestConfig
from registry_sync.exceptions import ReferentialIntegrityError
from registry_sync.ingest.csv_parser import ExportRow, ParsedExport, parse_export
from registry_sync.ingest.keys import normalize_identity
from registry_sync.models import Owner, OwnerRole, OwnerStatus, PropertyFile, Transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
NULL_MARKERS = ("NULL", "-")
# Amounts beyond double range are treated as unparseable.
MAX_EXPONENT = 308

_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(raw: str | None) -> Decimal:
    """Parse a monetary cell.

    Empty cells, ``NULL`` (any case) and a lone ``-`` are zero. Thousands
    separators and parentheses are removed; parentheses do not negate, so
    ``"(200)"`` is 200. The longest leading number is used and anything
    unparseable is zero, as is anything beyond ``1e308`` in magnitude.
    """
    if not raw or raw.upper() in NULL_MARKERS:
        return ZERO
    cleaned = raw.replace(",", "").replace("(", "").replace(")", "")
    match = _NUMBER_PREFIX.match(cleaned)
    if match is None:
        return ZERO
    try:
        value = Decimal(match.group().strip())
    except InvalidOperation:
        return ZERO
    if not value.is_finite() or value.is_zero() or value.adjusted() > MAX_EXPONENT:
        return ZERO
    return value


@dataclass
class IngestBatch:
    """Owners and files materialized from one export, keyed by natural key."""

    owners: dict[str, Owner] = field(default_factory=dict)
    files: dict[str, PropertyFile] = field(default_factory=dict)
    rows_read: int = 0
    rows_skipped: int = 0

    def summary(self) -> dict[str, int]:
        """Return summary counts of the batch."""
        return {
            "rows_read": self.rows_read,
            "rows_skipped": self.rows_skipped,
            "owners": len(self.owners),
            "files": len(self.files),
            "transactions": sum(len(f.transactions) for f in self.files.values()),
        }


def validate_batch(batch: IngestBatch) -> None:
    """Check that every file links to an owner of the same batch."""
    for file_no, prop in batch.files.items():
        if normalize_identity(prop.owner_cnic) not in batch.owners:
            raise ReferentialIntegrityError(
                f"File {file_no} references owner {prop.owner_cnic} outside the batch"
            )


class ExportNormalizer:
    """Aggregate export rows into an :class:`IngestBatch`.

    Parameters
    ----------
    config : IngestConfig | None
        Placeholder values for generated owners and absent fields.
    clock : callable | None
        Returns epoch milliseconds; used to synthesize transaction ids.
    """

    def __init__(self, config: IngestConfig | None = None, clock=None) -> None:
        self.config = config or IngestConfig()
        self._clock = clock or (lambda: int(time.time() * 1000))

    def normalize(self, parsed: ParsedExport) -> IngestBatch:
        """Build owners, files and transactions from parsed rows."""
        batch = IngestBatch()
        stamp = self._clock()

        for row in parsed.rows:
            batch.rows_read += 1
            raw_cnic = row.get("cnic") or ""
            cnic = normalize_identity(raw_cnic)
            item_code = row.get("item_code") or ""

            if not cnic or not item_code:
                batch.rows_skipped += 1
                logger.debug("Skipping row %d: missing identity or item code", row.ordinal)
                continue

            owner = batch.owners.get(cnic)
            if owner is None:
                owner = self._new_owner(row, raw_cnic, cnic)
                batch.owners[cnic] = owner

            prop = batch.files.get(item_code)
            if prop is None:
                prop = self._new_file(row, item_code, owner, cnic)
                batch.files[item_code] = prop

            paid = parse_amount(row.get("paid"))
            outstanding = parse_amount(row.get("outstanding"))
            prop.payment_received += paid
            prop.balance += outstanding
            prop.transactions.append(
                self._new_transaction(row, prop, stamp, paid, outstanding)
            )

        logger.info(
            "Normalized %d rows into %d owners and %d files (%d skipped)",
            batch.rows_read,
            len(batch.owners),
            len(batch.files),
            batch.rows_skipped,
        )
        return batch

    def _text(self, row: ExportRow, name: str) -> str:
        return row.get(name) or self.config.default_text

    def _new_owner(self, row: ExportRow, raw_cnic: str, cnic: str) -> Owner:
        return Owner(
            id=f"user-{cnic}",
            cnic=raw_cnic,
            name=row.get("owner_name") or self.config.default_owner_name,
            email=f"{cnic}@{self.config.placeholder_email_domain}",
            phone=self._text(row, "phone"),
            role=OwnerRole.CLIENT,
            status=OwnerStatus.ACTIVE,
            password=self.config.default_owner_secret,
        )

    def _new_file(self, row: ExportRow, item_code: str, owner: Owner, cnic: str) -> PropertyFile:
        return PropertyFile(
            file_no=item_code,
            owner_name=owner.name,
            owner_cnic=cnic,
            plot_value=parse_amount(row.get("doc_total")),
            currency_no=self._text(row, "currency_no"),
            plot_size=row.get("plot_size") or "Plot",
            father_name=self._text(row, "father_name"),
            cell_no=self._text(row, "phone"),
            reg_date=self._text(row, "reg_date"),
            address=self._text(row, "address"),
            plot_no=self._text(row, "plot_no"),
            block=self._text(row, "block"),
            park=self._text(row, "park"),
            corner=self._text(row, "corner"),
            main_boulevard=self._text(row, "main_boulevard"),
        )

    def _new_transaction(
        self,
        row: ExportRow,
        prop: PropertyFile,
        stamp: int,
        paid: Decimal,
        outstanding: Decimal,
    ) -> Transaction:
        return Transaction(
            seq=row.ordinal,
            trans_id=stamp + row.ordinal,
            item_code=prop.file_no,
            short_name=prop.file_no,
            amount_paid=paid,
            outstanding=outstanding,
            due_date=self._text(row, "due_date"),
            receivable=parse_amount(row.get("receivable")),
            installment_no=parse_amount(row.get("installment_no")),
            installment_name=row.get("installment_name") or "",
            currency=self.config.currency,
            doc_total=prop.plot_value,
            receipt_date=row.get("receipt_date"),
            mode=row.get("mode"),
            surcharge=parse_amount(row.get("surcharge")),
        )


def ingest_text(text: str, config: IngestConfig | None = None) -> IngestBatch:
    """Parse and normalize raw export text in one pass.

    Raises
    ------
    CsvFormatError
        If the text is too short to hold a header and a data row.
    """
    return ExportNormalizer(config).normalize(parse_export(text))

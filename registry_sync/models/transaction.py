"""Ledger transaction model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Transaction:
    """One ledger line of a property file."""

    seq: int  # Source row order
    trans_id: int  # Epoch millis + row ordinal, unique within a batch only
    item_code: str
    amount_paid: Decimal
    outstanding: Decimal
    due_date: str = "-"
    description: str = ""
    trans_type: str = "13"
    line_id: int = 0
    short_name: str = ""
    receivable: Decimal = Decimal("0")
    installment_no: Decimal = Decimal("0")
    installment_name: str = ""
    plot_type: str = "Res"
    currency: str = "PKR"
    doc_total: Decimal = Decimal("0")
    status: str = "Synced"
    balance: Decimal = Decimal("0")
    pay_source: int = 0
    receipt_date: str | None = None
    mode: str | None = None
    surcharge: Decimal = Decimal("0")

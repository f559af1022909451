"""Property file model."""

from dataclasses import dataclass, field
from decimal import Decimal

from registry_sync.models.transaction import Transaction


@dataclass
class PropertyFile:
    """A registered plot file and its ledger.

    ``balance`` and ``payment_received`` accumulate from the transactions
    recorded during ingestion. ``owner_cnic`` is a denormalized back-reference
    to the owner's normalized identity number.
    """

    file_no: str
    owner_name: str
    owner_cnic: str
    plot_value: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    payment_received: Decimal = Decimal("0")
    surcharge: Decimal = Decimal("0")
    receivable: Decimal = Decimal("0")
    total_receivable: Decimal = Decimal("0")
    overdue: Decimal = Decimal("0")
    currency_no: str = "-"
    plot_size: str = "Plot"
    father_name: str = "-"
    cell_no: str = "-"
    reg_date: str = "-"
    address: str = "-"

    # Plot | Block | Park | Corner | MB
    plot_no: str = "-"
    block: str = "-"
    park: str = "-"
    corner: str = "-"
    main_boulevard: str = "-"

    transactions: list[Transaction] = field(default_factory=list)

"""Synthetic accounting-system export generator.

Produces the kind of messy CSV an external ledger system emits: upper-case
vendor headers, formatted identity numbers, thousands separators, amounts
wrapped in parentheses, ``NULL`` and ``-`` markers, quoted cells containing
commas, blank lines and an optional byte-order marker.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from registry_sync.generators.base import BaseGenerator

HEADERS = [
    "U_OCNIC",
    "OName",
    "OFatName",
    "OCell",
    "OPrAddress",
    "ItemCode",
    "CurrencyNo",
    "Dscription",
    "DocTotal",
    "ReconSum",
    "BalDueDeb",
    "DueDate",
    "RefDate",
    "Mode",
    "U_IntNo",
    "U_IntName",
    "Markup",
    "U_PlotNo",
    "U_Block",
    "U_Park",
    "U_Corner",
    "U_MainBu",
]

PLOT_SIZES = ["5 Marla", "7 Marla", "10 Marla", "1 Kanal", "2 Kanal"]
BLOCKS = ["A", "B", "C", "D", "Executive"]
MODES = ["Cash", "Cheque", "Online", "Pay Order"]


@dataclass
class ExportRecord:
    """Expected values behind one generated export line."""

    cnic: str
    item_code: str
    paid: Decimal
    outstanding: Decimal


class ExportGenerator(BaseGenerator):
    """Generate synthetic ledger exports.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    messy : bool
        Inject formatting noise (separators, parentheses, null markers,
        blank lines).
    """

    def __init__(self, seed: int | None = None, messy: bool = True) -> None:
        super().__init__(seed)
        self.messy = messy
        self.records: list[ExportRecord] = []

    def generate_rows(self, num_owners: int, files_per_owner: int = 2, lines_per_file: int = 3) -> Iterator[list[str]]:
        """Yield data rows (without header) and record the expected values."""
        for _ in range(num_owners):
            cnic = self.fake.unique.numerify("#####-#######-#")
            name = self.fake.name()
            father = self.fake.name_male()
            phone = self.fake.numerify("03##-#######")
            address = self.fake.address().replace("\n", ", ")
            for _ in range(files_per_owner):
                item_code = f"DIN-{self.rng.choice('RC')}-{self.fake.unique.numerify('####')}"
                plot_value = Decimal(self.rng.randrange(1_500_000, 25_000_000, 50_000))
                size = self.rng.choice(PLOT_SIZES)
                block = self.rng.choice(BLOCKS)
                plot_no = str(self.rng.randint(1, 999))
                flags = [self.rng.choice(["Yes", "No"]) for _ in range(3)]
                for line_no in range(lines_per_file):
                    paid = Decimal(self.rng.randrange(0, 500_000, 1_000))
                    outstanding = Decimal(self.rng.randrange(0, 2_000_000, 1_000))
                    self.records.append(ExportRecord(cnic, item_code, paid, outstanding))
                    due = self.fake.date_between(start_date="-3y", end_date="+1y")
                    yield [
                        cnic,
                        name,
                        father,
                        phone,
                        address,
                        item_code,
                        f"C-{self.rng.randint(1000, 9999)}",
                        size,
                        self._amount(plot_value),
                        self._amount(paid),
                        self._amount(outstanding),
                        due.isoformat(),
                        due.isoformat() if paid else self._null(),
                        self.rng.choice(MODES) if paid else "-",
                        str(line_no),
                        "Down Payment" if line_no == 0 else f"Installment {line_no}",
                        self._amount(Decimal(self.rng.randrange(0, 5_000, 100))),
                        plot_no,
                        block,
                        *flags,
                    ]

    def generate_csv(
        self,
        num_owners: int,
        files_per_owner: int = 2,
        lines_per_file: int = 3,
        bom: bool = False,
    ) -> str:
        """Render a complete export as CSV text."""
        lines = [",".join(HEADERS)]
        for row in self.generate_rows(num_owners, files_per_owner, lines_per_file):
            lines.append(",".join(self._quote(cell) for cell in row))
            if self.messy and self.rng.random() < 0.1:
                lines.append("")
        newline = "\r\n" if self.messy else "\n"
        text = newline.join(lines) + newline
        return ("\ufeff" + text) if bom else text

    def _amount(self, value: Decimal) -> str:
        if not self.messy:
            return str(value)
        if value == 0:
            return self.rng.choice(["0", "NULL", "-", ""])
        style = self.rng.random()
        if style < 0.4:
            return f"{value:,.2f}"
        if style < 0.6:
            return f"({value:,.2f})"
        return str(value)

    def _null(self) -> str:
        return "NULL" if self.messy else ""

    @staticmethod
    def _quote(cell: str) -> str:
        if "," in cell:
            return f'"{cell}"'
        return cell

    def expected_totals(self) -> dict[str, tuple[Decimal, Decimal]]:
        """Paid and outstanding sums per item code for generated records."""
        totals: dict[str, tuple[Decimal, Decimal]] = {}
        for rec in self.records:
            paid, outstanding = totals.get(rec.item_code, (Decimal("0"), Decimal("0")))
            totals[rec.item_code] = (paid + rec.paid, outstanding + rec.outstanding)
        return totals

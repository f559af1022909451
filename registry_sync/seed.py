"""Factory-default registry contents.

Used when the local store has no snapshot for a collection and after a
factory reset. Every call returns fresh objects.
"""

from decimal import Decimal

from registry_sync.models import (
    BROADCAST_RECEIVER,
    Message,
    Notice,
    Owner,
    OwnerRole,
    OwnerStatus,
    PropertyFile,
    Transaction,
)

ADMIN_ID = "admin-001"
CLIENT_ID = "user-3520212345671"


def seed_owners() -> list[Owner]:
    """Default administrator and demo owner."""
    return [
        Owner(
            id=ADMIN_ID,
            cnic="00000-0000000-0",
            name="Registry Administrator",
            email="admin@dinproperties.com.pk",
            phone="-",
            role=OwnerRole.ADMIN,
            status=OwnerStatus.ACTIVE,
            password="admin123",
        ),
        Owner(
            id=CLIENT_ID,
            cnic="35202-1234567-1",
            name="Ahmed Raza",
            email="3520212345671@dinproperties.com.pk",
            phone="0300-1234567",
            role=OwnerRole.CLIENT,
            status=OwnerStatus.ACTIVE,
            password="password123",
        ),
    ]


def seed_files() -> list[PropertyFile]:
    """One demo file with two ledger lines."""
    return [
        PropertyFile(
            file_no="DIN-R-0001",
            owner_name="Ahmed Raza",
            owner_cnic="3520212345671",
            plot_value=Decimal("2500000"),
            balance=Decimal("1500000"),
            payment_received=Decimal("1000000"),
            currency_no="C-1001",
            plot_size="5 Marla",
            father_name="Muhammad Raza",
            cell_no="0300-1234567",
            reg_date="2023-01-15",
            address="House 12, Street 4, Lahore",
            plot_no="112",
            block="A",
            park="No",
            corner="Yes",
            main_boulevard="No",
            transactions=[
                Transaction(
                    seq=0,
                    trans_id=1673740800000,
                    item_code="DIN-R-0001",
                    short_name="DIN-R-0001",
                    amount_paid=Decimal("500000"),
                    outstanding=Decimal("2000000"),
                    due_date="2023-01-15",
                    installment_name="Down Payment",
                    doc_total=Decimal("2500000"),
                    receipt_date="2023-01-15",
                    mode="Cheque",
                ),
                Transaction(
                    seq=1,
                    trans_id=1673740800001,
                    item_code="DIN-R-0001",
                    short_name="DIN-R-0001",
                    amount_paid=Decimal("500000"),
                    outstanding=Decimal("-500000"),
                    due_date="2023-07-15",
                    installment_no=Decimal("1"),
                    installment_name="Installment 1",
                    doc_total=Decimal("2500000"),
                    receipt_date="2023-07-10",
                    mode="Online",
                ),
            ],
        ),
    ]


def seed_notices() -> list[Notice]:
    """Default public notices."""
    return [
        Notice(
            id="notice-001",
            title="Balloting Schedule",
            content="Balloting for residential plots will be announced on the portal.",
            date="2024-01-01",
            category="Announcement",
        ),
    ]


def seed_messages() -> list[Message]:
    """Default welcome broadcast."""
    return [
        Message(
            id="msg-001",
            sender_id=ADMIN_ID,
            receiver_id=BROADCAST_RECEIVER,
            content="Welcome to the DIN Properties owner portal.",
            timestamp="2024-01-01T09:00:00",
            subject="Welcome",
        ),
    ]


SEEDS = {
    "owners": seed_owners,
    "files": seed_files,
    "notices": seed_notices,
    "messages": seed_messages,
}

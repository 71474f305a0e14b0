"""
Value types passed between the ledger, the allocation policy and the
settlement applier. All of them are immutable snapshots; the ORM rows stay
inside the ledger and the applier.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple, Union

from motoshop.models.customer_receivable import CustomerReceivable
from motoshop.models.payment_status import PaymentStatus, derive_status
from motoshop.models.sales_order_payment import PaymentMethod
from motoshop.services.receivables.money import ZERO


@dataclass(frozen=True)
class Receivable:
    """Debt position of one sales order at the time it was read"""
    id: int
    sales_order_id: int
    customer_id: int
    original_amount: Decimal
    paid_amount: Decimal
    created_at: datetime
    order_number: str = ""

    def __post_init__(self):
        if self.original_amount < ZERO:
            raise ValueError(f"receivable {self.id}: original_amount is negative")
        if not ZERO <= self.paid_amount <= self.original_amount:
            raise ValueError(
                f"receivable {self.id}: paid_amount {self.paid_amount} "
                f"outside 0..{self.original_amount}"
            )

    @property
    def balance(self) -> Decimal:
        return self.original_amount - self.paid_amount

    @property
    def status(self) -> PaymentStatus:
        return derive_status(self.original_amount, self.paid_amount)

    @property
    def is_open(self) -> bool:
        return self.status is not PaymentStatus.PAID

    @classmethod
    def from_row(cls, row: CustomerReceivable) -> "Receivable":
        return cls(
            id=row.id,
            sales_order_id=row.sales_order_id,
            customer_id=row.customer_id,
            original_amount=row.original_amount,
            paid_amount=row.paid_amount or ZERO,
            created_at=row.created_at,
            order_number=row.sales_order.order_number if row.sales_order else "",
        )


@dataclass(frozen=True)
class Specific:
    """Pay one named sales order, no spillover"""
    sales_order_id: int


@dataclass(frozen=True)
class OnAccount:
    """Pay the oldest open orders first"""


ON_ACCOUNT = OnAccount()

PaymentMode = Union[Specific, OnAccount]


@dataclass(frozen=True)
class PaymentAllocation:
    receivable_id: int
    sales_order_id: int
    amount_applied: Decimal


@dataclass(frozen=True)
class SettlementResult:
    allocations: Tuple[PaymentAllocation, ...]
    total_applied: Decimal
    remaining_unapplied: Decimal = ZERO


@dataclass(frozen=True)
class PaymentRequest:
    customer_id: int
    amount: Decimal
    payment_method: PaymentMethod
    mode: PaymentMode = ON_ACCOUNT
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
    paid_at: Optional[datetime] = None

    @classmethod
    def build(cls, customer_id: int, amount, payment_method,
              sales_order_id: Optional[int] = None, **extra) -> "PaymentRequest":
        """Map the optional sales order id of the inbound request onto a mode"""
        mode = Specific(sales_order_id) if sales_order_id is not None else ON_ACCOUNT
        return cls(
            customer_id=customer_id,
            amount=amount,
            payment_method=PaymentMethod(payment_method),
            mode=mode,
            **extra
        )


@dataclass(frozen=True)
class LedgerSummary:
    total_original: Decimal = ZERO
    total_paid: Decimal = ZERO
    total_balance: Decimal = ZERO
    outstanding_count: int = 0


@dataclass(frozen=True)
class LedgerView:
    customer_id: int
    receivables: Tuple[Receivable, ...] = field(default_factory=tuple)
    summary: LedgerSummary = field(default_factory=LedgerSummary)

"""
Payment allocation policy.

Pure decision function: no I/O, no clock. Given a fresh snapshot of a
customer's receivables and an incoming amount it returns either a complete
allocation plan or raises; it never returns a partial plan.

- Specific(order): the whole amount goes to that one order, and it must fit
  in the order's balance.
- OnAccount: open receivables oldest first (created_at, then id), each takes
  min(remaining, balance) until the amount is used up. Paying more than the
  total debt is rejected; there is no customer credit.
"""

from decimal import Decimal
from typing import Iterable, List, Sequence

from motoshop.services.receivables.domain import (
    OnAccount, PaymentAllocation, PaymentMode, Receivable, SettlementResult, Specific
)
from motoshop.services.receivables.errors import (
    AmountExceedsBalance, AmountExceedsTotalBalance, ReceivableNotFound
)
from motoshop.services.receivables.money import MoneyLike, ZERO, format_money, to_payment_amount


def fifo_order(receivables: Iterable[Receivable]) -> List[Receivable]:
    """Open receivables, oldest debt first"""
    return sorted(
        (r for r in receivables if r.is_open and r.balance > ZERO),
        key=lambda r: (r.created_at, r.id),
    )


def allocate(receivables: Sequence[Receivable], amount: MoneyLike, mode: PaymentMode) -> SettlementResult:
    """Decide how `amount` is spread over `receivables`"""
    amount = to_payment_amount(amount)

    if isinstance(mode, Specific):
        allocations = _allocate_specific(receivables, amount, mode.sales_order_id)
    elif isinstance(mode, OnAccount):
        allocations = _allocate_on_account(receivables, amount)
    else:
        raise TypeError(f"unknown payment mode: {mode!r}")

    total_applied = sum((a.amount_applied for a in allocations), ZERO)
    return SettlementResult(
        allocations=tuple(allocations),
        total_applied=total_applied,
        remaining_unapplied=amount - total_applied,
    )


def _allocate_specific(receivables: Sequence[Receivable], amount: Decimal,
                       sales_order_id: int) -> List[PaymentAllocation]:
    target = next(
        (r for r in receivables if r.sales_order_id == sales_order_id and r.is_open),
        None,
    )
    if target is None:
        raise ReceivableNotFound(
            "Không tìm thấy công nợ cho đơn hàng này hoặc đơn hàng đã được thanh toán đầy đủ"
        )

    if amount > target.balance:
        raise AmountExceedsBalance(
            f"Số tiền thanh toán ({format_money(amount)}) vượt quá công nợ đơn hàng "
            f"({format_money(target.balance)})"
        )

    return [PaymentAllocation(target.id, target.sales_order_id, amount)]


def _allocate_on_account(receivables: Sequence[Receivable], amount: Decimal) -> List[PaymentAllocation]:
    ordered = fifo_order(receivables)
    total_balance = sum((r.balance for r in ordered), ZERO)

    if total_balance <= ZERO:
        raise AmountExceedsTotalBalance("Khách hàng không có công nợ cần thanh toán")
    if amount > total_balance:
        raise AmountExceedsTotalBalance(
            f"Số tiền thanh toán ({format_money(amount)}) vượt quá tổng công nợ "
            f"({format_money(total_balance)})"
        )

    allocations = []
    remaining = amount
    for receivable in ordered:
        if remaining <= ZERO:
            break
        applied = min(remaining, receivable.balance)
        allocations.append(PaymentAllocation(receivable.id, receivable.sales_order_id, applied))
        remaining -= applied

    return allocations

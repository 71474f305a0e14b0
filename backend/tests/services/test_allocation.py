from decimal import Decimal

import pytest

from motoshop.models.payment_status import PaymentStatus
from motoshop.services.receivables.allocation import allocate, fifo_order
from motoshop.services.receivables.domain import ON_ACCOUNT, PaymentAllocation, Specific
from motoshop.services.receivables.errors import (
    AmountExceedsBalance, AmountExceedsTotalBalance, InvalidAmount, ReceivableNotFound
)


def applied(result):
    return [(a.receivable_id, a.amount_applied) for a in result.allocations]


def test_fifo_pays_oldest_first_and_stops(make_receivable):
    receivables = [
        make_receivable(3, "30", days=2),
        make_receivable(1, "100", days=0),
        make_receivable(2, "50", days=1),
    ]

    result = allocate(receivables, Decimal("120"), ON_ACCOUNT)

    assert applied(result) == [(1, Decimal("100.00")), (2, Decimal("20.00"))]
    assert result.total_applied == Decimal("120.00")
    assert result.remaining_unapplied == Decimal("0")


def test_fifo_ties_on_created_at_broken_by_id(make_receivable):
    receivables = [make_receivable(7, "40"), make_receivable(4, "40")]

    result = allocate(receivables, "50", ON_ACCOUNT)

    assert applied(result) == [(4, Decimal("40.00")), (7, Decimal("10.00"))]


def test_fifo_skips_paid_receivable_even_if_oldest(make_receivable):
    receivables = [
        make_receivable(1, "100", paid="100", days=0),
        make_receivable(2, "50", days=1),
    ]

    result = allocate(receivables, "30", ON_ACCOUNT)

    assert applied(result) == [(2, Decimal("30.00"))]


def test_fifo_uses_partial_balance_not_original(make_receivable):
    receivables = [
        make_receivable(1, "200", paid="80", days=0),
        make_receivable(2, "50", days=1),
    ]

    result = allocate(receivables, "150", ON_ACCOUNT)

    assert applied(result) == [(1, Decimal("120.00")), (2, Decimal("30.00"))]


def test_fifo_exact_total_settles_everything(make_receivable):
    receivables = [make_receivable(1, "100"), make_receivable(2, "50", days=1), make_receivable(3, "30", days=2)]

    result = allocate(receivables, "180", ON_ACCOUNT)

    assert applied(result) == [(1, Decimal("100.00")), (2, Decimal("50.00")), (3, Decimal("30.00"))]


def test_fifo_overpayment_rejected(make_receivable):
    receivables = [make_receivable(1, "100"), make_receivable(2, "50", days=1), make_receivable(3, "30", days=2)]

    with pytest.raises(AmountExceedsTotalBalance):
        allocate(receivables, "200", ON_ACCOUNT)


def test_fifo_without_debt_rejected(make_receivable):
    receivables = [make_receivable(1, "100", paid="100")]

    with pytest.raises(AmountExceedsTotalBalance) as exc_info:
        allocate(receivables, "10", ON_ACCOUNT)
    assert "không có công nợ" in exc_info.value.message


def test_fifo_empty_set_rejected():
    with pytest.raises(AmountExceedsTotalBalance):
        allocate([], "10", ON_ACCOUNT)


def test_zero_original_receivable_never_allocated(make_receivable):
    receivables = [make_receivable(1, "0", days=0), make_receivable(2, "20", days=1)]

    result = allocate(receivables, "20", ON_ACCOUNT)

    assert applied(result) == [(2, Decimal("20.00"))]


def test_conservation_at_cent_level(make_receivable):
    receivables = [
        make_receivable(1, "0.10", days=0),
        make_receivable(2, "0.20", days=1),
        make_receivable(3, "33.33", days=2),
    ]

    result = allocate(receivables, "10.01", ON_ACCOUNT)

    assert sum(a.amount_applied for a in result.allocations) == Decimal("10.01")
    assert applied(result) == [(1, Decimal("0.10")), (2, Decimal("0.20")), (3, Decimal("9.71"))]


def test_specific_exact_balance(make_receivable):
    receivables = [make_receivable(1, "100"), make_receivable(2, "50", days=1)]

    result = allocate(receivables, "50", Specific(sales_order_id=102))

    assert result.allocations == (PaymentAllocation(2, 102, Decimal("50.00")),)


def test_specific_over_balance_rejected_without_spillover(make_receivable):
    receivables = [make_receivable(1, "100"), make_receivable(2, "50", days=1)]

    with pytest.raises(AmountExceedsBalance):
        allocate(receivables, "51", Specific(sales_order_id=102))


def test_specific_unknown_order(make_receivable):
    with pytest.raises(ReceivableNotFound):
        allocate([make_receivable(1, "100")], "10", Specific(sales_order_id=999))


def test_specific_paid_order_rejected(make_receivable):
    receivables = [make_receivable(1, "100", paid="100"), make_receivable(2, "50", days=1)]

    with pytest.raises(ReceivableNotFound):
        allocate(receivables, "10", Specific(sales_order_id=101))


@pytest.mark.parametrize("amount", ["0", "-5", "abc", "1.001", "NaN", "Infinity", None, True])
def test_invalid_amounts(make_receivable, amount):
    with pytest.raises(InvalidAmount):
        allocate([make_receivable(1, "100")], amount, ON_ACCOUNT)


def test_unknown_mode_is_a_programming_error(make_receivable):
    with pytest.raises(TypeError):
        allocate([make_receivable(1, "100")], "10", "on_account")


def test_allocation_leaves_snapshot_untouched(make_receivable):
    r = make_receivable(1, "100")

    allocate([r], "40", ON_ACCOUNT)

    assert r.paid_amount == Decimal("0")
    assert r.status is PaymentStatus.UNPAID


def test_fifo_order_only_open(make_receivable):
    receivables = [
        make_receivable(1, "10", paid="10", days=0),
        make_receivable(2, "10", paid="5", days=3),
        make_receivable(3, "10", days=1),
    ]

    assert [r.id for r in fifo_order(receivables)] == [3, 2]

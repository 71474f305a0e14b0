"""Money helpers: every amount is a Decimal with two places."""

from decimal import Decimal, InvalidOperation
from typing import Union

from motoshop.core.config import settings
from motoshop.services.receivables.errors import InvalidAmount

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, int, float, str]


def to_money(value: MoneyLike) -> Decimal:
    """
    Parse a monetary value.

    Floats go through str() first so 0.1 stays 0.1. Values that are not
    finite or carry more than two decimal places are rejected rather than
    rounded, so no amount is ever silently changed.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount("Số tiền không hợp lệ")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"Số tiền không hợp lệ: {value!r}")

    if not amount.is_finite():
        raise InvalidAmount(f"Số tiền không hợp lệ: {value!r}")
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmount(f"Số tiền quá lớn: {value!r}")
    if amount != quantized:
        raise InvalidAmount(f"Số tiền chỉ được có tối đa 2 chữ số thập phân: {value!r}")
    return quantized


def to_payment_amount(value: MoneyLike) -> Decimal:
    """Money that must be strictly positive"""
    amount = to_money(value)
    if amount <= ZERO:
        raise InvalidAmount("Số tiền thanh toán phải lớn hơn 0")
    return amount


def format_money(amount: Decimal, currency: str = None) -> str:
    """
    Vietnamese grouping: 1.250.000 VND, 1.250,50 VND
    """
    if amount == amount.to_integral_value():
        text = f"{amount:,.0f}"
    else:
        text = f"{amount:,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{text} {currency or settings.CURRENCY_CODE}"

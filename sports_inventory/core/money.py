"""Currency helpers shared by the CRUD layer and the transaction processor."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import ConstraintViolation

TWOPLACES = Decimal("0.01")
# Numeric(10, 2) leaves room for eight integer digits.
MAX_AMOUNT = Decimal("99999999.99")


def to_decimal(value: object, *, field: str) -> Decimal:
    """Convert user-entered currency values to a two-place ``Decimal``.

    Accepts ``Decimal``, ``int``, ``float`` and strings such as ``"$1,200.50"``.
    Anything unparseable raises ``ConstraintViolation`` naming ``field``.
    """

    if isinstance(value, bool) or value is None:
        raise ConstraintViolation(f"{field} is required")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().replace("$", "").replace(",", "")
        if not cleaned:
            raise ConstraintViolation(f"{field} is required")
        try:
            amount = Decimal(cleaned)
        except InvalidOperation as exc:
            raise ConstraintViolation(f"{field} must be a decimal amount") from exc
    else:
        raise ConstraintViolation(f"{field} must be a decimal amount")
    if not amount.is_finite():
        raise ConstraintViolation(f"{field} must be a decimal amount")
    amount = quantize_currency(amount)
    if abs(amount) > MAX_AMOUNT:
        raise ConstraintViolation(f"{field} exceeds {MAX_AMOUNT}")
    return amount


def quantize_currency(value: Decimal) -> Decimal:
    return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)

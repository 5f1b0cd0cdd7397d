# app/utils/decimal_utils.py
from decimal import Decimal, ROUND_HALF_UP

TWOPLACES = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if isinstance(value, Decimal):
        return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def weighted_average_cost(
    old_average: Decimal,
    old_quantity: int,
    unit_cost: Decimal,
    quantity: int,
) -> Decimal:
    """Blend the running average with a new receipt.

    (old_average * old_quantity + unit_cost * quantity) / max(new_quantity, 1),
    rounded half-up to two places. The divisor floor keeps a receipt into a
    negative or empty row from dividing by zero.
    """
    new_quantity = old_quantity + quantity
    previous_value = to_decimal(old_average) * old_quantity
    received_value = Decimal(str(unit_cost)) * quantity
    return to_decimal((previous_value + received_value) / max(new_quantity, 1))

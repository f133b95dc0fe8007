"""Money helpers for the single currency the store trades in.

Amounts travel through the domain as floats at full precision. Rounding to
the minor unit happens only when a value is displayed or written out.
"""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY = "INR"
CURRENCY_SYMBOL = "₹"

_MINOR_UNIT = Decimal("0.01")


def round_money(amount) -> Decimal:
    """Round an amount half-up to two decimal places."""
    # str() first so the binary float noise does not leak into the Decimal
    return Decimal(str(amount)).quantize(_MINOR_UNIT, rounding=ROUND_HALF_UP)


def format_amount(amount, symbol: bool = False) -> str:
    """Fixed-point, two decimal display string (``"15.00"`` or ``"₹15.00"``)."""
    text = f"{round_money(amount)}"
    return f"{CURRENCY_SYMBOL}{text}" if symbol else text


def to_display_float(amount) -> float:
    """Rounded amount as a float, for JSON payloads."""
    return float(round_money(amount))

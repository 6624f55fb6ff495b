from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """
    Coerce an int, float, str or Decimal into a Decimal.
    Floats go through str() so 0.1 becomes Decimal("0.1") rather than its
    binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(amount: Decimal) -> Decimal:
    """Round to whole cents, half away from zero. Negative zero is folded to zero."""
    quantized = to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    if quantized.is_zero():
        return Decimal("0.00")
    return quantized


def format_money(amount: Decimal) -> str:
    return str(quantize_money(amount))

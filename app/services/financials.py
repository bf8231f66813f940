from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

PESO_SIGN = "₱"


def safe_decimal(value, default: str = "0.00") -> Decimal:
    if value is None or value == "" or isinstance(value, bool):
        return Decimal(default)
    try:
        if isinstance(value, Decimal):
            result = value
        else:
            result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(default)
    # NaN/Infinity parse fine but cannot be summed into a report
    if not result.is_finite():
        return Decimal(default)
    return result


def safe_int(value, default: int = 0) -> int:
    if value is None or value == "" or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    number = safe_decimal(value, "NaN")
    if number.is_nan():
        return default
    return int(number)


def format_peso(value) -> str:
    """Philippine peso display string, e.g. ``₱1,234.50`` or ``-₱12.00``."""
    amount = safe_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{PESO_SIGN}{abs(amount):,}"

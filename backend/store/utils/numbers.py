from decimal import Decimal
from typing import Optional


def strip_trailing_zeros(value) -> Optional[Decimal]:
    """
    Drop trailing fractional zeros without switching to exponent notation:
    Decimal("10.00") -> Decimal("10"), Decimal("1.50") -> Decimal("1.5").
    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    normalized = value.normalize()
    if normalized.as_tuple().exponent > 0:
        normalized = normalized.quantize(Decimal(1))
    return normalized

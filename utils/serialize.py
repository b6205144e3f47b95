from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CENTS = Decimal("0.01")


def money(value: Optional[Decimal]) -> Optional[float]:
    """Amounts go over the wire as numbers with exactly two decimal places."""
    if value is None:
        return None
    return float(Decimal(value).quantize(CENTS, ROUND_HALF_UP))


def rate(value: Optional[Decimal]) -> Optional[float]:
    if value is None:
        return None
    return float(Decimal(value).normalize())


def timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None

"""
Interest-rate lookup and amount-tier adjustment.
Rates are annual fractions (0.12 == 12%).
"""
from __future__ import annotations

from decimal import Decimal

from schemas.enums import LoanType

BASE_RATES: dict[LoanType, Decimal] = {
    LoanType.PERSONAL: Decimal("0.12"),
    LoanType.AUTO: Decimal("0.08"),
    LoanType.HOME: Decimal("0.06"),
    LoanType.STUDENT: Decimal("0.05"),
    LoanType.BUSINESS: Decimal("0.10"),
}

_missing = set(LoanType) - set(BASE_RATES)
if _missing:
    raise RuntimeError(f"No base rate configured for loan types: {sorted(t.value for t in _missing)}")

LARGE_LOAN_THRESHOLD = Decimal("50000")
SMALL_LOAN_THRESHOLD = Decimal("10000")
LARGE_LOAN_DISCOUNT = Decimal("0.005")
SMALL_LOAN_PREMIUM = Decimal("0.01")


def base_rate(loan_type: LoanType) -> Decimal:
    return BASE_RATES[LoanType(loan_type)]


def adjust_rate(rate: Decimal, principal: Decimal) -> Decimal:
    """
    Larger principals get a 50 bps discount, smaller ones a 100 bps premium.
    Both thresholds are exclusive: exactly 50,000 or 10,000 keeps the base rate.
    """
    if principal > LARGE_LOAN_THRESHOLD:
        return rate - LARGE_LOAN_DISCOUNT
    if principal < SMALL_LOAN_THRESHOLD:
        return rate + SMALL_LOAN_PREMIUM
    return rate


def quote_rate(loan_type: LoanType, principal: Decimal) -> Decimal:
    return adjust_rate(base_rate(loan_type), principal)

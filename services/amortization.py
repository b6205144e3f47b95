"""
Level monthly payment for a fully amortizing loan:

    M = P * r * (1 + r)^n / ((1 + r)^n - 1),   r = annual_rate / 12

The monthly rate is rounded half-up to 8 places before use and the payment
half-up to cents. A zero rate degenerates to P / n.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

MONTHS_PER_YEAR = Decimal("12")
RATE_QUANTUM = Decimal("0.00000001")
CENTS = Decimal("0.01")


def monthly_rate(annual_rate: Decimal) -> Decimal:
    return (Decimal(annual_rate) / MONTHS_PER_YEAR).quantize(RATE_QUANTUM, ROUND_HALF_UP)


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    # term_months > 0 is guaranteed by callers
    principal = Decimal(principal)
    r = monthly_rate(annual_rate)
    if r == 0:
        return (principal / Decimal(term_months)).quantize(CENTS, ROUND_HALF_UP)

    with localcontext() as ctx:
        ctx.prec = 60
        growth = (Decimal(1) + r) ** term_months
        payment = principal * r * growth / (growth - Decimal(1))
    return payment.quantize(CENTS, ROUND_HALF_UP)

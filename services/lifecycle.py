"""
Loan application state machine.

Each operation takes the current snapshot (or the creation parameters for submit)
and returns a Result holding the next snapshot, or a tagged failure. Inputs are
never mutated, and the current time comes from an injected clock so transitions
are deterministic under test.

    SUBMITTED -> UNDER_REVIEW -> APPROVED -> DISBURSED
                              -> REJECTED
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Optional

from schemas.application import LoanApplicationState
from schemas.enums import ApplicationStatus, LoanType, Operation
from services.amortization import monthly_payment
from services.rates import quote_rate
from utils.result import ErrorType, Result

Clock = Callable[[], datetime]

# Scales of the persisted loan_amount and interest_rate columns; terms are
# rounded to them before the payment is derived.
AMOUNT_QUANTUM = Decimal("0.01")
RATE_QUANTUM = Decimal("0.00001")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# operation -> (required current status, resulting status)
TRANSITIONS: dict[Operation, tuple[ApplicationStatus, ApplicationStatus]] = {
    Operation.REVIEW: (ApplicationStatus.SUBMITTED, ApplicationStatus.UNDER_REVIEW),
    Operation.APPROVE: (ApplicationStatus.UNDER_REVIEW, ApplicationStatus.APPROVED),
    Operation.REJECT: (ApplicationStatus.UNDER_REVIEW, ApplicationStatus.REJECTED),
    Operation.DISBURSE: (ApplicationStatus.APPROVED, ApplicationStatus.DISBURSED),
}


def allowed_operations(status: ApplicationStatus) -> list[Operation]:
    return [op for op, (source, _) in TRANSITIONS.items() if source == status]


def _invalid_transition(state: LoanApplicationState, operation: Operation) -> Result[LoanApplicationState]:
    required, _ = TRANSITIONS[operation]
    return Result.fail(
        f"Cannot {operation.value} application in status {state.status.value}; "
        f"requires {required.value}",
        ErrorType.INVALID_TRANSITION,
        current_status=state.status.value,
        operation=operation.value,
    )


def _transition(
    state: LoanApplicationState,
    operation: Operation,
    now: datetime,
    **changes: Any,
) -> Result[LoanApplicationState]:
    required, target = TRANSITIONS[operation]
    if state.status != required:
        return _invalid_transition(state, operation)
    return Result.ok(state.model_copy(update={**changes, "status": target, "updated_at": now}))


def _as_decimal(value: Any) -> Optional[Decimal]:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _quantized(value: Any, quantum: Decimal) -> Optional[Decimal]:
    number = _as_decimal(value)
    if number is None or not number.is_finite():
        return None
    try:
        return number.quantize(quantum, ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits for the decimal context
        return None


def submit(
    customer_id: str,
    loan_amount: Any,
    loan_type: Any,
    loan_term_months: Any,
    purpose: Optional[str] = None,
    *,
    credit_score: Optional[int] = None,
    downpayment: Any = None,
    monthly_debt_payments: Any = None,
    clock: Clock = utc_now,
) -> Result[LoanApplicationState]:
    """
    Build a new SUBMITTED application with quoted rate and payment.
    The customer existence check and the active-application ceiling are the
    caller's responsibility; both need the store.
    """
    amount = _quantized(loan_amount, AMOUNT_QUANTUM)
    if amount is None or amount <= 0:
        return Result.fail("Loan amount must be a positive number", ErrorType.VALIDATION, field="loanAmount")
    if isinstance(loan_term_months, bool) or not isinstance(loan_term_months, int) or loan_term_months <= 0:
        return Result.fail("Loan term must be a positive number of months", ErrorType.VALIDATION, field="loanTermMonths")
    try:
        kind = LoanType(loan_type)
    except ValueError:
        return Result.fail(f"Unknown loan type: {loan_type}", ErrorType.VALIDATION, field="loanType")

    rate = quote_rate(kind, amount)
    now = clock()
    return Result.ok(
        LoanApplicationState(
            customer_id=customer_id,
            loan_amount=amount,
            loan_type=kind,
            loan_term_months=loan_term_months,
            purpose=purpose,
            credit_score=credit_score,
            downpayment=None if downpayment is None else _quantized(downpayment, AMOUNT_QUANTUM),
            monthly_debt_payments=(
                None if monthly_debt_payments is None else _quantized(monthly_debt_payments, AMOUNT_QUANTUM)
            ),
            status=ApplicationStatus.SUBMITTED,
            interest_rate=rate,
            monthly_payment=monthly_payment(amount, rate, loan_term_months),
            created_at=now,
            updated_at=now,
        )
    )


def review(state: LoanApplicationState, *, clock: Clock = utc_now) -> Result[LoanApplicationState]:
    return _transition(state, Operation.REVIEW, clock())


def approve(
    state: LoanApplicationState,
    approved_amount: Any,
    interest_rate: Any,
    *,
    clock: Clock = utc_now,
) -> Result[LoanApplicationState]:
    """Approve with possibly revised terms; the payment is recomputed from them."""
    if state.status != TRANSITIONS[Operation.APPROVE][0]:
        return _invalid_transition(state, Operation.APPROVE)
    amount = _quantized(approved_amount, AMOUNT_QUANTUM)
    if amount is None or amount <= 0:
        return Result.fail("Approved amount must be a positive number", ErrorType.VALIDATION, field="approvedAmount")
    rate = _quantized(interest_rate, RATE_QUANTUM)
    if rate is None or rate < 0:
        return Result.fail("Interest rate must be zero or positive", ErrorType.VALIDATION, field="interestRate")

    now = clock()
    return _transition(
        state,
        Operation.APPROVE,
        now,
        loan_amount=amount,
        interest_rate=rate,
        monthly_payment=monthly_payment(amount, rate, state.loan_term_months),
        approval_date=now,
    )


def reject(state: LoanApplicationState, reason: str, *, clock: Clock = utc_now) -> Result[LoanApplicationState]:
    if state.status != TRANSITIONS[Operation.REJECT][0]:
        return _invalid_transition(state, Operation.REJECT)
    if not reason or not reason.strip():
        return Result.fail("Rejection reason is required", ErrorType.VALIDATION, field="rejectionReason")
    return _transition(state, Operation.REJECT, clock(), rejection_reason=reason)


def disburse(state: LoanApplicationState, *, clock: Clock = utc_now) -> Result[LoanApplicationState]:
    return _transition(state, Operation.DISBURSE, clock())

"""
Runs lifecycle operations against the store.

Every operation loads the current row, lets the state machine decide, writes
the new snapshot back and commits, all while holding a lock keyed by the
application id (or, for submission, the customer id). Failure paths roll the
session back before the lock is released, so a failed call never leaves a
partial write behind.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from models import LoanApplication
from schemas.application import ApplicationCreate, LoanApplicationState
from schemas.enums import Operation
from services import lifecycle, store
from services.lifecycle import Clock, utc_now
from services.limiter import ApplicationLimiter
from services.locks import application_locks, customer_locks
from utils.result import ErrorType, Result

logger = logging.getLogger(__name__)

Transition = Callable[[LoanApplicationState], Result[LoanApplicationState]]


async def submit_application(
    session: AsyncSession,
    body: ApplicationCreate,
    *,
    clock: Clock = utc_now,
    limiter: Optional[ApplicationLimiter] = None,
) -> Result[LoanApplication]:
    logger.info(f"Submitting loan application for customer ID: {body.customer_id}")
    limiter = limiter or ApplicationLimiter()

    async with customer_locks.hold(body.customer_id):
        customer = await store.lock_customer(session, body.customer_id)
        if customer is None:
            await session.rollback()
            logger.warning(f"Customer not found with ID: {body.customer_id}")
            return Result.fail(
                f"Customer not found with ID: {body.customer_id}",
                ErrorType.NOT_FOUND,
                resource="customer",
            )

        if not await limiter.can_submit(session, body.customer_id):
            await session.rollback()
            logger.warning(f"Customer {body.customer_id} has reached {limiter.ceiling} active applications")
            return Result.fail(
                f"Customer has reached maximum number of active applications ({limiter.ceiling})",
                ErrorType.LIMIT_EXCEEDED,
                limit=limiter.ceiling,
            )

        result = lifecycle.submit(
            body.customer_id,
            body.loan_amount,
            body.loan_type,
            body.loan_term_months,
            body.purpose,
            credit_score=body.credit_score,
            downpayment=body.downpayment,
            monthly_debt_payments=body.monthly_debt_payments,
            clock=clock,
        )
        if not result:
            await session.rollback()
            logger.warning(f"Rejected loan application input: {result.error}")
            return result

        row = await store.save_application(session, result.value)
        await session.commit()

    logger.info(f"Loan application submitted with ID: {row.id}")
    return Result.ok(row)


async def _run_transition(
    session: AsyncSession,
    application_id: str,
    operation: Operation,
    transition: Transition,
) -> Result[LoanApplication]:
    async with application_locks.hold(application_id):
        row = await store.get_application(session, application_id)
        if row is None:
            await session.rollback()
            logger.warning(f"Loan application not found with ID: {application_id}")
            return Result.fail(
                f"Loan application not found with ID: {application_id}",
                ErrorType.NOT_FOUND,
                resource="loan_application",
            )

        result = transition(LoanApplicationState.model_validate(row))
        if not result:
            await session.rollback()
            logger.warning(f"Cannot {operation.value} loan application {application_id}: {result.error}")
            return result

        store.apply_state(row, result.value)
        try:
            await session.commit()
        except StaleDataError:
            # Another process updated the row after we read it
            await session.rollback()
            logger.warning(f"Concurrent update lost on loan application {application_id} during {operation.value}")
            return Result.fail(
                f"Loan application {application_id} was modified concurrently",
                ErrorType.INVALID_TRANSITION,
                operation=operation.value,
            )

    logger.info(f"Loan application {application_id} moved to {row.status.value}")
    return Result.ok(row)


async def review_application(
    session: AsyncSession, application_id: str, *, clock: Clock = utc_now
) -> Result[LoanApplication]:
    logger.info(f"Starting review for loan application ID: {application_id}")
    return await _run_transition(
        session, application_id, Operation.REVIEW, lambda s: lifecycle.review(s, clock=clock)
    )


async def approve_application(
    session: AsyncSession,
    application_id: str,
    approved_amount,
    interest_rate,
    *,
    clock: Clock = utc_now,
) -> Result[LoanApplication]:
    logger.info(f"Approving loan application ID: {application_id} with amount: {approved_amount}")
    return await _run_transition(
        session,
        application_id,
        Operation.APPROVE,
        lambda s: lifecycle.approve(s, approved_amount, interest_rate, clock=clock),
    )


async def reject_application(
    session: AsyncSession, application_id: str, reason: str, *, clock: Clock = utc_now
) -> Result[LoanApplication]:
    logger.info(f"Rejecting loan application ID: {application_id} with reason: {reason}")
    return await _run_transition(
        session, application_id, Operation.REJECT, lambda s: lifecycle.reject(s, reason, clock=clock)
    )


async def disburse_application(
    session: AsyncSession, application_id: str, *, clock: Clock = utc_now
) -> Result[LoanApplication]:
    logger.info(f"Disbursing loan for application ID: {application_id}")
    return await _run_transition(
        session, application_id, Operation.DISBURSE, lambda s: lifecycle.disburse(s, clock=clock)
    )

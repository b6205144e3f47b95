"""
Persistence for applications and customers.
Rows are identified by short prefixed ids assigned on first save.
"""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Customer, LoanApplication
from schemas.application import LoanApplicationState
from schemas.enums import ACTIVE_STATUSES, ApplicationStatus

_STATE_FIELDS = (
    "customer_id",
    "loan_amount",
    "loan_type",
    "loan_term_months",
    "purpose",
    "credit_score",
    "downpayment",
    "monthly_debt_payments",
    "status",
    "interest_rate",
    "monthly_payment",
    "approval_date",
    "rejection_reason",
    "created_at",
    "updated_at",
)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def apply_state(row: LoanApplication, state: LoanApplicationState) -> LoanApplication:
    for name in _STATE_FIELDS:
        setattr(row, name, getattr(state, name))
    return row


async def get_application(session: AsyncSession, application_id: str) -> Optional[LoanApplication]:
    result = await session.execute(
        select(LoanApplication)
        .where(LoanApplication.id == application_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def save_application(session: AsyncSession, state: LoanApplicationState) -> LoanApplication:
    """Insert a new application row and return it with its id assigned."""
    row = apply_state(LoanApplication(id=state.id or new_id("app")), state)
    session.add(row)
    await session.flush()
    return row


async def count_active(session: AsyncSession, customer_id: str) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(LoanApplication)
        .where(LoanApplication.customer_id == customer_id)
        .where(LoanApplication.status.in_(ACTIVE_STATUSES))
    )
    return result.scalar_one()


async def list_applications(
    session: AsyncSession,
    customer_id: Optional[str] = None,
    status: Optional[ApplicationStatus] = None,
) -> list[LoanApplication]:
    stmt = select(LoanApplication)
    if customer_id is not None:
        stmt = stmt.where(LoanApplication.customer_id == customer_id)
    if status is not None:
        stmt = stmt.where(LoanApplication.status == status)
    result = await session.execute(stmt.order_by(LoanApplication.created_at.desc()))
    return list(result.scalars().all())


async def list_pending(session: AsyncSession) -> list[LoanApplication]:
    """Applications awaiting a decision, oldest first."""
    result = await session.execute(
        select(LoanApplication)
        .where(LoanApplication.status == ApplicationStatus.UNDER_REVIEW)
        .order_by(LoanApplication.created_at.asc())
    )
    return list(result.scalars().all())


async def total_loan_value(session: AsyncSession, status: Optional[ApplicationStatus] = None) -> Decimal:
    stmt = select(func.coalesce(func.sum(LoanApplication.loan_amount), 0))
    if status is not None:
        stmt = stmt.where(LoanApplication.status == status)
    result = await session.execute(stmt)
    return Decimal(str(result.scalar_one())).quantize(Decimal("0.01"))


async def lock_customer(session: AsyncSession, customer_id: str) -> Optional[Customer]:
    """Load a customer with a row lock (ignored by SQLite) for the rest of the transaction."""
    result = await session.execute(
        select(Customer).where(Customer.id == customer_id).with_for_update()
    )
    return result.scalar_one_or_none()


async def get_customer(session: AsyncSession, customer_id: str) -> Optional[Customer]:
    result = await session.execute(select(Customer).where(Customer.id == customer_id))
    return result.scalar_one_or_none()


async def get_customer_by_email(session: AsyncSession, email: str) -> Optional[Customer]:
    result = await session.execute(select(Customer).where(func.lower(Customer.email) == email.lower()))
    return result.scalar_one_or_none()


async def list_customers(session: AsyncSession, name: Optional[str] = None) -> list[Customer]:
    stmt = select(Customer)
    if name:
        pattern = f"%{name}%"
        stmt = stmt.where(or_(Customer.first_name.ilike(pattern), Customer.last_name.ilike(pattern)))
    result = await session.execute(stmt.order_by(Customer.last_name, Customer.first_name))
    return list(result.scalars().all())


async def add_customer(session: AsyncSession, customer: Customer) -> Customer:
    if customer.id is None:
        customer.id = new_id("cus")
    session.add(customer)
    await session.flush()
    return customer

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models import Customer
from schemas.customer import CustomerCreate
from services import store
from services.lifecycle import Clock, utc_now
from utils.result import ErrorType, Result

logger = logging.getLogger(__name__)


async def register_customer(
    session: AsyncSession, body: CustomerCreate, *, clock: Clock = utc_now
) -> Result[Customer]:
    """Create a customer; emails are unique, compared case-insensitively."""
    logger.info(f"Creating customer with email: {body.email}")
    if await store.get_customer_by_email(session, body.email) is not None:
        logger.warning(f"Customer with email {body.email} already exists")
        return Result.fail(
            f"Customer with email {body.email} already exists",
            ErrorType.VALIDATION,
            field="email",
        )

    now = clock()
    try:
        customer = await store.add_customer(
            session,
            Customer(**body.model_dump(by_alias=False), created_at=now, updated_at=now),
        )
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        await session.rollback()
        return Result.fail(
            f"Customer with email {body.email} already exists",
            ErrorType.VALIDATION,
            field="email",
        )
    logger.info(f"Customer created with ID: {customer.id}")
    return Result.ok(customer)

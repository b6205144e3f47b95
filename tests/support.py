"""Shared fixtures: a deterministic clock and an in-memory database per test."""
import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import create_async_engine

from database import engine_kwargs, init_db, make_sessionmaker
from models import Customer
from schemas.application import ApplicationCreate
from schemas.enums import LoanType
from services.applications import submit_application

MEMORY_URL = "sqlite+aiosqlite://"


class FixedClock:
    """Returns start, start + step, start + 2*step, ... on successive calls."""

    def __init__(self, start=datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc), step=timedelta(minutes=5)):
        self.current = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + self.step
        self.calls += 1
        return now


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = create_async_engine(MEMORY_URL, **engine_kwargs(MEMORY_URL))
        await init_db(self.engine)
        self.sessionmaker = make_sessionmaker(self.engine)
        self.clock = FixedClock()

    async def asyncTearDown(self):
        await self.engine.dispose()

    async def add_customer(self, customer_id="cus-test", email=None):
        async with self.sessionmaker() as session:
            session.add(
                Customer(
                    id=customer_id,
                    first_name="Test",
                    last_name=customer_id,
                    email=email or f"{customer_id}@example.com",
                )
            )
            await session.commit()
        return customer_id

    async def submit(
        self, customer_id="cus-test", amount="20000", loan_type=LoanType.PERSONAL, term=36, applicant=None, **kwargs
    ):
        body = ApplicationCreate(
            customer_id=customer_id,
            loan_amount=Decimal(amount),
            loan_type=loan_type,
            loan_term_months=term,
            purpose="Test",
            **(applicant or {}),
        )
        async with self.sessionmaker() as session:
            return await submit_application(session, body, clock=self.clock, **kwargs)

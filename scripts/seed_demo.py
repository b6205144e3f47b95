"""
Seed demo customers, each with one submitted loan application.
Run: python -m scripts.seed_demo (from the project root).
"""
import asyncio
import os
import sys
from decimal import Decimal

# Add parent so we can import from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from database import AsyncSessionLocal, init_db
from models import Customer
from schemas.application import ApplicationCreate
from schemas.enums import EmploymentStatus, LoanType
from services.applications import submit_application


CUSTOMERS_DATA = [
    {
        "id": "cus-demo-ada",
        "first_name": "Ada",
        "last_name": "Moreno",
        "email": "ada.moreno@example.com",
        "annual_income": Decimal("85000"),
        "employment_status": EmploymentStatus.EMPLOYED,
        "application": {"loan_amount": Decimal("25000"), "loan_type": LoanType.AUTO, "loan_term_months": 60, "purpose": "New car"},
    },
    {
        "id": "cus-demo-ben",
        "first_name": "Ben",
        "last_name": "Okafor",
        "email": "ben.okafor@example.com",
        "annual_income": Decimal("120000"),
        "employment_status": EmploymentStatus.SELF_EMPLOYED,
        "application": {"loan_amount": Decimal("75000"), "loan_type": LoanType.BUSINESS, "loan_term_months": 84, "purpose": "Workshop equipment"},
    },
    {
        "id": "cus-demo-chen",
        "first_name": "Chen",
        "last_name": "Li",
        "email": "chen.li@example.com",
        "annual_income": Decimal("18000"),
        "employment_status": EmploymentStatus.STUDENT,
        "application": {"loan_amount": Decimal("8000"), "loan_type": LoanType.STUDENT, "loan_term_months": 48, "purpose": "Tuition"},
    },
]


async def seed():
    await init_db()
    async with AsyncSessionLocal() as session:
        for data in CUSTOMERS_DATA:
            existing = await session.execute(select(Customer).where(Customer.id == data["id"]))
            if existing.scalar_one_or_none():
                print(f"Customer {data['id']} already exists, skipping")
                continue
            fields = {k: v for k, v in data.items() if k != "application"}
            session.add(Customer(**fields))
            await session.commit()

            result = await submit_application(
                session,
                ApplicationCreate(customer_id=data["id"], **data["application"]),
            )
            if not result:
                print(f"Could not submit application for {data['id']}: {result.error}")
                continue
            app = result.value
            print(f"Seeded customer {data['id']} with application {app.id} at {app.interest_rate} ({app.monthly_payment}/month)")
    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())

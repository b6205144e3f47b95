from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import raise_for_failure
from database import get_db
from models import Customer
from schemas.customer import CustomerCreate
from services import store
from services.customers import register_customer
from utils.serialize import money, timestamp

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])

MSG_CUSTOMER_NOT_FOUND = "Customer not found"


def _customer_to_response(c: Customer) -> dict[str, Any]:
    return {
        "id": c.id,
        "firstName": c.first_name,
        "lastName": c.last_name,
        "email": c.email,
        "phoneNumber": c.phone_number,
        "address": c.address,
        "dateOfBirth": c.date_of_birth,
        "annualIncome": money(c.annual_income),
        "employmentStatus": c.employment_status.value if c.employment_status else None,
        "createdAt": timestamp(c.created_at),
        "updatedAt": timestamp(c.updated_at),
    }


@router.post("", status_code=201)
async def create_customer(body: CustomerCreate, db: AsyncSession = Depends(get_db)):
    result = await register_customer(db, body)
    raise_for_failure(result)
    return _customer_to_response(result.value)


@router.get("")
async def list_customers(name: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return [_customer_to_response(c) for c in await store.list_customers(db, name=name)]


@router.get("/search")
async def search_customers(name: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)):
    """Match first or last name, case-insensitively."""
    return [_customer_to_response(c) for c in await store.list_customers(db, name=name)]


@router.get("/email/{email}")
async def get_customer_by_email(email: str, db: AsyncSession = Depends(get_db)):
    customer = await store.get_customer_by_email(db, email)
    if not customer:
        raise HTTPException(status_code=404, detail=MSG_CUSTOMER_NOT_FOUND)
    return _customer_to_response(customer)


@router.get("/{customer_id}")
async def get_customer(customer_id: str, db: AsyncSession = Depends(get_db)):
    customer = await store.get_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail=MSG_CUSTOMER_NOT_FOUND)
    return _customer_to_response(customer)

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from schemas.enums import EmploymentStatus


class CustomerCreate(BaseModel):
    first_name: str = Field(..., alias="firstName", min_length=1)
    last_name: str = Field(..., alias="lastName", min_length=1)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    address: Optional[str] = None
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth", pattern=r"^\d{4}-\d{2}-\d{2}$")
    annual_income: Optional[Decimal] = Field(None, alias="annualIncome", ge=0)
    employment_status: Optional[EmploymentStatus] = Field(None, alias="employmentStatus")

    model_config = {"populate_by_name": True}

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from schemas.enums import ApplicationStatus, LoanType


class ApplicationCreate(BaseModel):
    customer_id: str = Field(..., alias="customerId")
    loan_amount: Decimal = Field(..., alias="loanAmount", gt=0)
    loan_type: LoanType = Field(..., alias="loanType")
    loan_term_months: int = Field(..., alias="loanTermMonths", gt=0)
    purpose: Optional[str] = None
    credit_score: Optional[int] = Field(None, alias="creditScore", ge=300, le=850)
    downpayment: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    monthly_debt_payments: Optional[Decimal] = Field(None, alias="monthlyDebtPayments", ge=0, decimal_places=2)

    model_config = {"populate_by_name": True}


class ApprovalRequest(BaseModel):
    approved_amount: Decimal = Field(..., alias="approvedAmount", gt=0)
    interest_rate: Decimal = Field(..., alias="interestRate", ge=0)

    model_config = {"populate_by_name": True}


class RejectionRequest(BaseModel):
    rejection_reason: str = Field(..., alias="rejectionReason", min_length=1)

    model_config = {"populate_by_name": True}


class LoanApplicationState(BaseModel):
    """
    Immutable snapshot of an application as seen by the lifecycle engine.
    Transitions return a new snapshot via model_copy; the input is never touched.
    """

    id: Optional[str] = None
    customer_id: str
    loan_amount: Decimal
    loan_type: LoanType
    loan_term_months: int
    purpose: Optional[str] = None
    credit_score: Optional[int] = None
    downpayment: Optional[Decimal] = None
    monthly_debt_payments: Optional[Decimal] = None
    status: ApplicationStatus
    interest_rate: Decimal
    monthly_payment: Decimal
    approval_date: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"frozen": True, "from_attributes": True}

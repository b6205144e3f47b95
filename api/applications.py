from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import raise_for_failure
from database import get_db
from models import LoanApplication
from schemas.application import ApplicationCreate, ApprovalRequest, RejectionRequest
from schemas.enums import ApplicationStatus
from services import applications as service
from services import store
from services.lifecycle import allowed_operations
from utils.serialize import money, rate, timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/loan-applications", tags=["loan-applications"])

MSG_APPLICATION_NOT_FOUND = "Loan application not found"


def _app_to_response(app: LoanApplication) -> dict[str, Any]:
    """Serialize application to dict with camelCase for clients."""
    return {
        "id": app.id,
        "customerId": app.customer_id,
        "loanAmount": money(app.loan_amount),
        "loanType": app.loan_type.value,
        "loanTermMonths": app.loan_term_months,
        "purpose": app.purpose,
        "creditScore": app.credit_score,
        "downpayment": money(app.downpayment),
        "monthlyDebtPayments": money(app.monthly_debt_payments),
        "status": app.status.value,
        "interestRate": rate(app.interest_rate),
        "monthlyPayment": money(app.monthly_payment),
        "approvalDate": timestamp(app.approval_date),
        "rejectionReason": app.rejection_reason,
        "allowedOperations": [op.value for op in allowed_operations(app.status)],
        "createdAt": timestamp(app.created_at),
        "updatedAt": timestamp(app.updated_at),
    }


@router.post("", status_code=201)
async def submit_application(body: ApplicationCreate, db: AsyncSession = Depends(get_db)):
    logger.info(f"POST /api/v1/loan-applications - Submitting loan application for customer: {body.customer_id}")
    result = await service.submit_application(db, body)
    raise_for_failure(result)
    return _app_to_response(result.value)


@router.get("")
async def list_applications(db: AsyncSession = Depends(get_db)):
    return [_app_to_response(a) for a in await store.list_applications(db)]


@router.get("/pending")
async def list_pending_applications(db: AsyncSession = Depends(get_db)):
    return [_app_to_response(a) for a in await store.list_pending(db)]


@router.get("/customer/{customer_id}")
async def list_customer_applications(customer_id: str, db: AsyncSession = Depends(get_db)):
    return [_app_to_response(a) for a in await store.list_applications(db, customer_id=customer_id)]


@router.get("/status/{status}")
async def list_applications_by_status(status: ApplicationStatus, db: AsyncSession = Depends(get_db)):
    return [_app_to_response(a) for a in await store.list_applications(db, status=status)]


@router.get("/total-value")
async def get_total_loan_value(status: Optional[ApplicationStatus] = None, db: AsyncSession = Depends(get_db)):
    total = await store.total_loan_value(db, status=status)
    return {"status": status.value if status else None, "totalLoanValue": money(total)}


@router.get("/{application_id}")
async def get_application(application_id: str, db: AsyncSession = Depends(get_db)):
    app = await store.get_application(db, application_id)
    if not app:
        raise HTTPException(status_code=404, detail=MSG_APPLICATION_NOT_FOUND)
    return _app_to_response(app)


@router.put("/{application_id}/review")
async def review_application(application_id: str, db: AsyncSession = Depends(get_db)):
    logger.info(f"PUT /api/v1/loan-applications/{application_id}/review - Starting review")
    result = await service.review_application(db, application_id)
    raise_for_failure(result)
    return _app_to_response(result.value)


@router.put("/{application_id}/approve")
async def approve_application(application_id: str, body: ApprovalRequest, db: AsyncSession = Depends(get_db)):
    logger.info(f"PUT /api/v1/loan-applications/{application_id}/approve - Approving with amount: {body.approved_amount}")
    result = await service.approve_application(db, application_id, body.approved_amount, body.interest_rate)
    raise_for_failure(result)
    return _app_to_response(result.value)


@router.put("/{application_id}/reject")
async def reject_application(application_id: str, body: RejectionRequest, db: AsyncSession = Depends(get_db)):
    logger.info(f"PUT /api/v1/loan-applications/{application_id}/reject - Rejecting with reason: {body.rejection_reason}")
    result = await service.reject_application(db, application_id, body.rejection_reason)
    raise_for_failure(result)
    return _app_to_response(result.value)


@router.put("/{application_id}/disburse")
async def disburse_application(application_id: str, db: AsyncSession = Depends(get_db)):
    logger.info(f"PUT /api/v1/loan-applications/{application_id}/disburse - Disbursing loan")
    result = await service.disburse_application(db, application_id)
    raise_for_failure(result)
    return _app_to_response(result.value)

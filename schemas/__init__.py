from schemas.application import (
    ApplicationCreate,
    ApprovalRequest,
    LoanApplicationState,
    RejectionRequest,
)
from schemas.customer import CustomerCreate
from schemas.enums import ApplicationStatus, EmploymentStatus, LoanType, Operation

__all__ = [
    "ApplicationCreate",
    "ApplicationStatus",
    "ApprovalRequest",
    "CustomerCreate",
    "EmploymentStatus",
    "LoanApplicationState",
    "LoanType",
    "Operation",
    "RejectionRequest",
]

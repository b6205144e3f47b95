"""Closed value sets shared by the ORM models, the engine and the API schemas."""
from enum import Enum


class LoanType(str, Enum):
    PERSONAL = "PERSONAL"
    AUTO = "AUTO"
    HOME = "HOME"
    STUDENT = "STUDENT"
    BUSINESS = "BUSINESS"


class ApplicationStatus(str, Enum):
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DISBURSED = "DISBURSED"
    # Reserved terminal tag; no transition leads here yet
    CANCELLED = "CANCELLED"


class Operation(str, Enum):
    """Externally triggered lifecycle operations."""

    SUBMIT = "submit"
    REVIEW = "review"
    APPROVE = "approve"
    REJECT = "reject"
    DISBURSE = "disburse"


class EmploymentStatus(str, Enum):
    EMPLOYED = "EMPLOYED"
    UNEMPLOYED = "UNEMPLOYED"
    SELF_EMPLOYED = "SELF_EMPLOYED"
    RETIRED = "RETIRED"
    STUDENT = "STUDENT"


ACTIVE_STATUSES = (ApplicationStatus.SUBMITTED, ApplicationStatus.UNDER_REVIEW)
TERMINAL_STATUSES = frozenset(
    {ApplicationStatus.REJECTED, ApplicationStatus.DISBURSED, ApplicationStatus.CANCELLED}
)

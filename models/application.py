from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text, func

from database import Base
from schemas.enums import ApplicationStatus, LoanType


class LoanApplication(Base):
    __tablename__ = "loan_applications"

    id = Column(String(64), primary_key=True, index=True)
    customer_id = Column(String(64), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    loan_amount = Column(Numeric(14, 2), nullable=False)
    loan_type = Column(Enum(LoanType, native_enum=False, length=16), nullable=False)
    loan_term_months = Column(Integer, nullable=False)
    purpose = Column(Text, nullable=True)
    # Supplied by the applicant and stored as-is; no scoring uses them
    credit_score = Column(Integer, nullable=True)
    downpayment = Column(Numeric(14, 2), nullable=True)
    monthly_debt_payments = Column(Numeric(14, 2), nullable=True)
    status = Column(
        Enum(ApplicationStatus, native_enum=False, length=32),
        nullable=False,
        default=ApplicationStatus.SUBMITTED,
        index=True,
    )
    interest_rate = Column(Numeric(8, 5), nullable=False)
    monthly_payment = Column(Numeric(14, 2), nullable=False)
    approval_date = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    # Bumped on every UPDATE; a concurrent writer holding an older value fails with StaleDataError
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

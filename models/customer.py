from sqlalchemy import Column, DateTime, Enum, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from database import Base
from schemas.enums import EmploymentStatus


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(64), primary_key=True, index=True)
    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128), nullable=False)
    email = Column(String(256), unique=True, nullable=False, index=True)
    phone_number = Column(String(32), nullable=True)
    address = Column(Text, nullable=True)
    date_of_birth = Column(String(10), nullable=True)
    annual_income = Column(Numeric(14, 2), nullable=True)
    employment_status = Column(Enum(EmploymentStatus, native_enum=False, length=16), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    applications = relationship("LoanApplication", cascade="all, delete-orphan")

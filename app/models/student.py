"""Domain 1: Student Ledger Account Models"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import ENUM, JSONB, UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel
from app.models.enums import AccountStatus, EnrollmentStatus, NO_BURSARY
from app.utils.time import get_utc_now


class Student(BaseModel):
    """
    A student's ledger account.
    Holds the live (current-term) state; past terms live in promotion_history.
    """
    __tablename__ = "students"

    full_name = Column(String(255), nullable=False)
    pay_code = Column(String(50), nullable=True, unique=True, index=True)
    programme = Column(String(255), nullable=True)
    semester = Column(String(100), nullable=False, index=True)

    previous_balance = Column(Numeric(12, 2), default=0, nullable=False)
    bursary = Column(String(100), default=NO_BURSARY, nullable=False)
    services = Column(JSONB, default=list, nullable=False)  # List of service ids
    physical_requirements = Column(JSONB, default=list, nullable=False)

    account_status = Column(
        ENUM(AccountStatus, name="account_status", values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )
    clearance_history = Column(JSONB, default=list, nullable=False)
    status = Column(
        ENUM(EnrollmentStatus, name="enrollment_status", values_callable=lambda x: [e.value for e in x]),
        default=EnrollmentStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    enrollment_date = Column(Date, nullable=True)

    # Relationships
    promotion_history = relationship(
        "PromotionHistory",
        back_populates="student",
        order_by="PromotionHistory.promoted_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    billings = relationship("Billing", back_populates="student")
    payments = relationship("Payment", back_populates="student")

    def __repr__(self) -> str:
        return f"<Student {self.full_name} ({self.semester})>"


class PromotionHistory(BaseModel):
    """
    Frozen snapshot of a term a student has left.
    Rows are only ever appended.
    """
    __tablename__ = "promotion_history"

    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    promoted_at = Column(DateTime, default=get_utc_now, nullable=False)
    from_semester = Column(String(100), nullable=False)
    to_semester = Column(String(100), nullable=False)

    previous_balance = Column(Numeric(12, 2), default=0, nullable=False)
    initial_previous_balance = Column(Numeric(12, 2), nullable=True)
    snapshot_arrears = Column(Numeric(12, 2), nullable=True)
    bursary_snapshot = Column(String(100), nullable=True)
    services_snapshot = Column(JSONB, default=list, nullable=False)
    requirements_snapshot = Column(JSONB, default=list, nullable=False)

    student = relationship("Student", back_populates="promotion_history")

    def __repr__(self) -> str:
        return f"<PromotionHistory {self.from_semester} -> {self.to_semester}>"

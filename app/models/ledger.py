"""Domain 2: Billing and Payment Models"""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ENUM, JSONB, UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, SoftDeleteMixin
from app.models.enums import BillingStatus, BillingType, PaymentStatus, PaymentType
from app.utils.time import get_utc_today


class Billing(BaseModel, SoftDeleteMixin):
    """
    A charge against a student for a term.
    ``type`` stays free text; older rows predate the brought-forward flag.
    """
    __tablename__ = "billings"

    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    term = Column(String(100), nullable=False, index=True)
    type = Column(String(100), default=BillingType.TUITION.value, nullable=False)
    description = Column(Text, default="", nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    is_brought_forward = Column(Boolean, nullable=True)
    billed_on = Column(Date, default=get_utc_today, nullable=False)
    service_id = Column(String(100), nullable=True)
    status = Column(
        ENUM(BillingStatus, name="billing_status", values_callable=lambda x: [e.value for e in x]),
        default=BillingStatus.PENDING,
        nullable=False,
    )

    student = relationship("Student", back_populates="billings")

    def __repr__(self) -> str:
        return f"<Billing {self.type} {self.amount} ({self.term})>"


class Payment(BaseModel, SoftDeleteMixin):
    """
    Money received from (or credited to) a student.
    A NULL term means the payment belongs to whichever term is current.
    """
    __tablename__ = "payments"

    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    term = Column(String(100), nullable=True, index=True)
    method = Column(String(100), default="Cash", nullable=False)
    allocations = Column(JSONB, default=dict, nullable=False)  # Allocation key -> amount
    reference = Column(String(255), nullable=True)
    receipt_number = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    type = Column(
        ENUM(PaymentType, name="payment_type", values_callable=lambda x: [e.value for e in x]),
        default=PaymentType.PAYMENT,
        nullable=False,
    )
    status = Column(
        ENUM(PaymentStatus, name="payment_status", values_callable=lambda x: [e.value for e in x]),
        default=PaymentStatus.APPROVED,
        nullable=False,
    )
    paid_on = Column(Date, default=get_utc_today, nullable=False)
    recorded_by = Column(String(255), nullable=True)

    student = relationship("Student", back_populates="payments")

    def __repr__(self) -> str:
        return f"<Payment {self.amount} via {self.method}>"

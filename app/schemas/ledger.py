"""Ledger records passed between the store and the reconciliation engine.

These are plain pydantic models. ORM rows convert through
``model_validate(row)`` (``from_attributes``), and everything in
``app.ledger`` works on these records only.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.config import settings
from app.models.enums import (
    AccountGroup,
    AccountStatus,
    BillingStatus,
    BillingType,
    EnrollmentStatus,
    NO_BURSARY,
    PaymentStatus,
    PaymentType,
)
from app.utils.time import get_utc_now, get_utc_today

ZERO = Decimal("0")


class PhysicalRequirement(BaseModel):
    """An item a student must bring (e.g. reams of paper). Replaced, never edited in place."""
    name: str
    required: int = 0
    brought: int = 0
    color: str = "#94a3b8"

    model_config = ConfigDict(frozen=True, from_attributes=True)


class PromotionHistoryEntry(BaseModel):
    """Frozen snapshot of a student's term state taken when they left ``from_semester``."""
    id: UUID = Field(default_factory=uuid4)
    promoted_at: datetime = Field(default_factory=get_utc_now)
    from_semester: str
    to_semester: str
    previous_balance: Decimal = ZERO
    initial_previous_balance: Optional[Decimal] = None
    snapshot_arrears: Optional[Decimal] = None
    bursary_snapshot: Optional[str] = None
    services_snapshot: Tuple[str, ...] = ()
    requirements_snapshot: Tuple[PhysicalRequirement, ...] = ()

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ClearanceHistoryEntry(BaseModel):
    changed_at: datetime
    status: AccountStatus
    reason: str
    user: Optional[str] = None
    is_manual: bool = True

    model_config = ConfigDict(frozen=True, from_attributes=True)


class StudentRecord(BaseModel):
    id: UUID
    full_name: str
    pay_code: Optional[str] = None
    programme: Optional[str] = None
    semester: str
    previous_balance: Decimal = ZERO
    bursary: str = NO_BURSARY
    services: List[str] = []
    physical_requirements: List[PhysicalRequirement] = []
    promotion_history: List[PromotionHistoryEntry] = []
    account_status: Optional[AccountStatus] = None
    clearance_history: List[ClearanceHistoryEntry] = []
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    enrollment_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("bursary", mode="before")
    @classmethod
    def default_bursary(cls, v):
        return v or NO_BURSARY

    @field_validator("previous_balance", mode="before")
    @classmethod
    def default_previous_balance(cls, v):
        return ZERO if v is None else v


class BillingBase(BaseModel):
    student_id: UUID
    term: str
    type: str = BillingType.TUITION.value
    description: str = ""
    amount: Decimal
    # None means the flag was never set; arrears text in type or description still counts
    is_brought_forward: Optional[bool] = None
    billed_on: date = Field(default_factory=get_utc_today)
    service_id: Optional[str] = None


class BillingCreate(BillingBase):
    @field_validator("term")
    @classmethod
    def term_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("term is required for a billing")
        return v.strip()


class BillingRecord(BillingBase):
    id: UUID
    status: BillingStatus = BillingStatus.PENDING
    deleted_at: Optional[datetime] = None
    delete_reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PaymentBase(BaseModel):
    student_id: UUID
    amount: Decimal
    # None means "untagged": the payment belongs to the current term
    term: Optional[str] = None
    method: str = "Cash"
    allocations: Dict[str, Decimal] = {}
    reference: Optional[str] = None
    receipt_number: Optional[str] = None
    description: Optional[str] = None
    type: PaymentType = PaymentType.PAYMENT
    status: PaymentStatus = PaymentStatus.APPROVED
    paid_on: date = Field(default_factory=get_utc_today)
    recorded_by: Optional[str] = None

    @field_validator("term", mode="before")
    @classmethod
    def blank_term_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("allocations", mode="before")
    @classmethod
    def default_allocations(cls, v):
        return v or {}


class PaymentCreate(PaymentBase):
    @model_validator(mode="after")
    def allocations_match_amount(self) -> "PaymentCreate":
        if self.amount <= 0:
            raise ValueError("payment amount must be positive")
        if self.allocations:
            allocated = sum(self.allocations.values(), ZERO)
            if abs(allocated - self.amount) > settings.ALLOCATION_TOLERANCE:
                raise ValueError(
                    f"allocations total {allocated} does not match payment amount {self.amount}"
                )
        return self


class PaymentRecord(PaymentBase):
    id: UUID
    deleted_at: Optional[datetime] = None
    delete_reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BursaryRecord(BaseModel):
    """Flat discount against the tuition-bearing total of a term"""
    id: str
    name: str
    value: Decimal = ZERO

    model_config = ConfigDict(from_attributes=True)


class ServiceRecord(BaseModel):
    id: str
    name: str
    cost: Decimal = ZERO

    model_config = ConfigDict(from_attributes=True)


class AccountRecord(BaseModel):
    """A receiving account; payment methods are matched to these by name"""
    id: UUID = Field(default_factory=uuid4)
    name: str
    group: AccountGroup

    model_config = ConfigDict(from_attributes=True)


class AuditLogRecord(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    category: str
    message: str
    user: Optional[str] = None
    created_at: datetime = Field(default_factory=get_utc_now)

    model_config = ConfigDict(from_attributes=True)

"""Values produced by the reconciliation engine"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import AccountGroup, AccountStatus, CorrectionKind, NO_BURSARY, StatusColor
from app.schemas.ledger import (
    BillingCreate,
    PaymentRecord,
    PhysicalRequirement,
    PromotionHistoryEntry,
    StudentRecord,
)


class ViewContext(BaseModel):
    """Which term is being looked at and the state in effect for it"""
    is_current: bool = True
    target_term: str = ""
    start_prev_bal: Decimal = Decimal("0")
    requirements: Tuple[PhysicalRequirement, ...] = ()
    bursary_id: str = NO_BURSARY
    services_ids: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class AccountSummary(BaseModel):
    student_id: UUID
    view: ViewContext
    total_billing: Decimal
    total_payments: Decimal
    outstanding_balance: Decimal
    clearance_percentage: float
    account_status: Optional[AccountStatus] = None
    status_color: StatusColor

    @property
    def is_credit(self) -> bool:
        return self.outstanding_balance < 0


class CorrectionPlan(BaseModel):
    kind: CorrectionKind
    amount: Decimal
    description: str
    reason: str

    model_config = ConfigDict(frozen=True)


# Statement rows: persisted transactions vs display-only rows
class RealTransaction(BaseModel):
    kind: Literal["real"] = "real"
    source: Literal["billing", "payment"]
    record_id: UUID
    entry_date: date
    amount: Decimal
    term: str
    particulars: str
    description: str = ""
    reference: Optional[str] = None
    allocations: Optional[Dict[str, Decimal]] = None
    status: Optional[str] = None
    is_adjustment: bool = False

    model_config = ConfigDict(frozen=True)


class SyntheticDisplayRow(BaseModel):
    """Shown in a statement only. Has no record id and is never stored."""
    kind: Literal["synthetic"] = "synthetic"
    display_key: str
    entry_date: date
    amount: Decimal
    term: str
    particulars: str
    description: str = ""
    reference: Optional[str] = None

    model_config = ConfigDict(frozen=True)


LedgerRow = Annotated[Union[RealTransaction, SyntheticDisplayRow], Field(discriminator="kind")]


class PromotionPlan(BaseModel):
    student: StudentRecord
    new_billings: List[BillingCreate] = []
    retagged_payments: List[PaymentRecord] = []
    entry: Optional[PromotionHistoryEntry] = None
    arrears: Decimal = Decimal("0")


class IntegrityWarning(BaseModel):
    payment_id: UUID
    method: str
    amount: Decimal
    message: str


class CollectionsReport(BaseModel):
    totals: Dict[AccountGroup, Decimal] = {}
    orphaned_total: Decimal = Decimal("0")
    warnings: List[IntegrityWarning] = []

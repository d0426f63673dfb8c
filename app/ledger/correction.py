"""Balance corrections ("Fix Balance").

A correction never edits existing records. It plans exactly one new
adjustment record that moves the current balance to the requested target.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from app.core.exceptions import CorrectionRejected
from app.models.enums import BillingType, CorrectionKind, PaymentStatus, PaymentType
from app.schemas.ledger import BillingCreate, PaymentCreate, StudentRecord
from app.schemas.views import CorrectionPlan
from app.utils.time import get_utc_now

ADJUSTMENT_METHOD = "Adjustment"
# Fixed so a reason mentioning arrears never reads as a brought-forward bill
DEBIT_DESCRIPTION = "Balance adjustment"


def _as_decimal(value, label: str) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise CorrectionRejected(f"{label} is required")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise CorrectionRejected(f"{label} must be a number")


def plan_correction(current_balance, target_balance, reason: Optional[str]) -> CorrectionPlan:
    """
    Work out the single adjustment that takes ``current_balance`` to ``target_balance``.

    Raises:
        CorrectionRejected: missing target or reason, or nothing to correct
    """
    current = _as_decimal(current_balance, "Current balance")
    target = _as_decimal(target_balance, "Target balance")
    reason = (reason or "").strip()
    if not reason:
        raise CorrectionRejected("A reason is required for a balance correction")

    diff = target - current
    if diff == 0:
        raise CorrectionRejected("Target balance matches current balance. No fix needed.")

    # Reducing debt is a credit (payment); increasing it is a debit (billing)
    kind = CorrectionKind.CREDIT if diff < 0 else CorrectionKind.DEBIT
    return CorrectionPlan(kind=kind, amount=abs(diff), description=reason, reason=reason)


def build_correction_record(
    plan: CorrectionPlan,
    student: StudentRecord,
    now: Optional[datetime] = None,
    recorded_by: Optional[str] = None,
) -> Union[PaymentCreate, BillingCreate]:
    """Turn a plan into the ledger record to add, booked to the current term."""
    now = now or get_utc_now()
    stamp = int(now.timestamp() * 1000)

    if plan.kind == CorrectionKind.CREDIT:
        return PaymentCreate(
            student_id=student.id,
            amount=plan.amount,
            term=student.semester,
            method=ADJUSTMENT_METHOD,
            allocations={},
            reference=f"FIX_BAL_{stamp}",
            receipt_number=f"ADJ-{str(stamp)[-6:]}",
            description=plan.description,
            type=PaymentType.ADJUSTMENT,
            status=PaymentStatus.APPROVED,
            paid_on=now.date(),
            recorded_by=recorded_by,
        )

    return BillingCreate(
        student_id=student.id,
        term=student.semester,
        type=BillingType.ADJUSTMENT.value,
        description=DEBIT_DESCRIPTION,
        amount=plan.amount,
        is_brought_forward=False,
        billed_on=now.date(),
    )

"""End-of-term promotion.

Promotion freezes the term being left into a PromotionHistoryEntry and
moves its outstanding balance into the next term exactly once: a debt
becomes a brought-forward bill, a credit becomes the next term's starting
balance.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from app.core.exceptions import LedgerValidationError
from app.ledger.balance import compute_outstanding
from app.ledger.term_view import resolve_view
from app.models.enums import BillingType, CURRENT_TERM, EnrollmentStatus, PromotionAction
from app.schemas.ledger import (
    BillingCreate,
    BillingRecord,
    BursaryRecord,
    PaymentRecord,
    PhysicalRequirement,
    PromotionHistoryEntry,
    ServiceRecord,
    StudentRecord,
)
from app.schemas.views import PromotionPlan
from app.utils.time import get_utc_now

ZERO = Decimal("0")

_EXIT_STATUS = {
    PromotionAction.GRADUATE: EnrollmentStatus.GRADUATED,
    PromotionAction.DEACTIVATE: EnrollmentStatus.DEACTIVATED,
}


def _check_target_term(student: StudentRecord, to_semester: str) -> None:
    if not to_semester:
        raise LedgerValidationError("A target term is required for promotion")
    if to_semester == student.semester:
        raise LedgerValidationError(f"Student is already in {to_semester}")
    for entry in student.promotion_history:
        if to_semester in (entry.from_semester, entry.to_semester):
            raise LedgerValidationError(f"Student already has promotion history for {to_semester}")


def _new_term_billings(
    student: StudentRecord,
    to_semester: str,
    arrears: Decimal,
    tuition_fee: Optional[Decimal],
    compulsory_services: Sequence[str],
    services: Iterable[ServiceRecord],
    now: datetime,
) -> List[BillingCreate]:
    billed_on = now.date()
    billings: List[BillingCreate] = []

    if arrears > 0:
        billings.append(
            BillingCreate(
                student_id=student.id,
                term=to_semester,
                type=BillingType.BROUGHT_FORWARD.value,
                description=f"Balance Brought Forward ({student.semester})",
                amount=arrears,
                is_brought_forward=True,
                billed_on=billed_on,
            )
        )

    if tuition_fee is not None and tuition_fee > 0:
        billings.append(
            BillingCreate(
                student_id=student.id,
                term=to_semester,
                type=BillingType.TUITION.value,
                description=f"Tuition ({to_semester})",
                amount=tuition_fee,
                is_brought_forward=False,
                billed_on=billed_on,
            )
        )

    catalog = {s.id: s for s in services}
    for service_id in compulsory_services:
        service = catalog.get(service_id)
        if service is None:
            raise LedgerValidationError(f"Unknown service: {service_id}")
        billings.append(
            BillingCreate(
                student_id=student.id,
                term=to_semester,
                type=BillingType.SERVICE.value,
                description=service.name,
                amount=service.cost,
                is_brought_forward=False,
                billed_on=billed_on,
                service_id=service.id,
            )
        )
    return billings


def plan_promotion(
    student: StudentRecord,
    to_semester: Optional[str],
    billings: Iterable[BillingRecord],
    payments: Iterable[PaymentRecord],
    bursaries: Iterable[BursaryRecord],
    services: Iterable[ServiceRecord] = (),
    action: PromotionAction = PromotionAction.PROMOTE,
    tuition_fee: Optional[Decimal] = None,
    compulsory_services: Sequence[str] = (),
    new_requirements: Sequence[PhysicalRequirement] = (),
    now: Optional[datetime] = None,
) -> PromotionPlan:
    """
    Work out every change a promotion makes, without applying any of it.

    Raises:
        LedgerValidationError: inactive student, or an invalid target term
    """
    if student.status != EnrollmentStatus.ACTIVE:
        raise LedgerValidationError(f"Cannot promote a {student.status.value} student")

    action = PromotionAction(action)
    now = now or get_utc_now()
    payments = [p for p in payments if p.student_id == student.id]

    view = resolve_view(student, CURRENT_TERM)
    arrears = compute_outstanding(student.id, billings, payments, bursaries, view)

    # Untagged payments belong to the term being closed
    retagged = [p.model_copy(update={"term": student.semester}) for p in payments if p.term is None]

    if action in _EXIT_STATUS:
        return PromotionPlan(
            student=student.model_copy(update={"status": _EXIT_STATUS[action]}),
            retagged_payments=retagged,
            arrears=arrears,
        )

    to_semester = (to_semester or "").strip()
    _check_target_term(student, to_semester)

    carried_credit = arrears if arrears < 0 else ZERO
    entry = PromotionHistoryEntry(
        promoted_at=now,
        from_semester=student.semester,
        to_semester=to_semester,
        previous_balance=carried_credit,
        initial_previous_balance=student.previous_balance,
        snapshot_arrears=arrears,
        bursary_snapshot=student.bursary,
        services_snapshot=tuple(student.services),
        requirements_snapshot=tuple(student.physical_requirements),
    )

    promoted = student.model_copy(
        update={
            "semester": to_semester,
            "previous_balance": carried_credit,
            "services": list(compulsory_services),
            "physical_requirements": [r.model_copy(update={"brought": 0}) for r in new_requirements],
            "promotion_history": [*student.promotion_history, entry],
        }
    )

    return PromotionPlan(
        student=promoted,
        new_billings=_new_term_billings(
            student, to_semester, arrears, tuition_fee, compulsory_services, services, now
        ),
        retagged_payments=retagged,
        entry=entry,
        arrears=arrears,
    )

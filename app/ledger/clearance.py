"""Tuition clearance percentage.

This is a status metric for the live current term. It never looks at the
term a user happens to be viewing.
"""

from decimal import Decimal
from typing import Iterable, Optional

from app.ledger.arrears import has_brought_forward_bill, is_arrears_item, is_brought_forward_billing
from app.ledger.balance import bursary_value
from app.ledger.term_view import resolve_view
from app.models.enums import BillingType, CURRENT_TERM
from app.schemas.ledger import BillingRecord, BursaryRecord, PaymentRecord, StudentRecord

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def is_clearance_billing(billing: BillingRecord) -> bool:
    """Tuition and brought-forward lines count; services do not."""
    return billing.type == BillingType.TUITION.value or is_brought_forward_billing(billing)


def is_clearance_allocation(key: str) -> bool:
    return "tuition" in key.lower() or is_arrears_item(key)


def tuition_paid(payment: PaymentRecord) -> Decimal:
    """Portion of a payment that goes to tuition or arrears."""
    if payment.allocations:
        return sum(
            (amount for key, amount in payment.allocations.items() if is_clearance_allocation(key)),
            ZERO,
        )
    # Lump payment without a breakdown counts in full
    return payment.amount


def compute_clearance_pct(
    student: Optional[StudentRecord],
    billings: Iterable[BillingRecord],
    payments: Iterable[PaymentRecord],
    bursaries: Iterable[BursaryRecord],
) -> float:
    """
    Tuition paid / (tuition + arrears billed + missing starting balance - bursary).

    Returns a value in [0, 100]. A non-positive denominator means nothing is
    owed and yields 100.
    """
    if student is None:
        return 0.0

    current_term = student.semester
    student_billings = [b for b in billings if b.student_id == student.id]

    total_target_billed = sum(
        (b.amount for b in student_billings if b.term == current_term and is_clearance_billing(b)),
        ZERO,
    )
    bursary = bursary_value(bursaries, student.bursary)

    total_tuition_paid = sum(
        (
            tuition_paid(p)
            for p in payments
            if p.student_id == student.id and (p.term is None or p.term == current_term)
        ),
        ZERO,
    )

    # Checked across every term, not just the current one
    if has_brought_forward_bill(student_billings):
        effective_prev = ZERO
    else:
        effective_prev = resolve_view(student, CURRENT_TERM).start_prev_bal

    denominator = total_target_billed + effective_prev - bursary
    if denominator <= 0:
        return 100.0

    pct = total_tuition_paid / denominator * HUNDRED
    return float(max(ZERO, min(HUNDRED, pct)))

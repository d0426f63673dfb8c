"""Outstanding balance and total billing for a term view."""

from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from app.ledger.arrears import has_brought_forward_bill
from app.models.enums import NO_BURSARY
from app.schemas.ledger import BillingRecord, BursaryRecord, PaymentRecord
from app.schemas.views import ViewContext

ZERO = Decimal("0")


def term_billings(student_id: UUID, billings: Iterable[BillingRecord], term: str) -> List[BillingRecord]:
    return [b for b in billings if b.student_id == student_id and b.term == term]


def payment_in_term(payment: PaymentRecord, term: str, is_current: bool) -> bool:
    """A tagged payment belongs to its term; an untagged one only to the current term."""
    if payment.term is None:
        return is_current
    return payment.term == term


def term_payments(
    student_id: UUID,
    payments: Iterable[PaymentRecord],
    term: str,
    is_current: bool,
) -> List[PaymentRecord]:
    return [
        p for p in payments
        if p.student_id == student_id and payment_in_term(p, term, is_current)
    ]


def bursary_value(bursaries: Iterable[BursaryRecord], bursary_id: Optional[str]) -> Decimal:
    if not bursary_id or bursary_id == NO_BURSARY:
        return ZERO
    bursary = next((b for b in bursaries if b.id == bursary_id), None)
    return bursary.value if bursary is not None else ZERO


def _billed_and_prev(
    student_id: UUID,
    billings: Iterable[BillingRecord],
    view: ViewContext,
) -> Decimal:
    scoped = term_billings(student_id, billings, view.target_term)
    total = sum((b.amount for b in scoped), ZERO)
    # A brought-forward bill already carries the starting balance
    effective_prev = ZERO if has_brought_forward_bill(scoped) else view.start_prev_bal
    return total + effective_prev


def compute_total_payments(student_id: UUID, payments: Iterable[PaymentRecord], view: ViewContext) -> Decimal:
    scoped = term_payments(student_id, payments, view.target_term, view.is_current)
    return sum((p.amount for p in scoped), ZERO)


def compute_total_billing(
    student_id: UUID,
    billings: Iterable[BillingRecord],
    bursaries: Iterable[BursaryRecord],
    view: ViewContext,
) -> Decimal:
    """Billed for the term (starting balance included once) less bursary."""
    return _billed_and_prev(student_id, billings, view) - bursary_value(bursaries, view.bursary_id)


def compute_outstanding(
    student_id: UUID,
    billings: Iterable[BillingRecord],
    payments: Iterable[PaymentRecord],
    bursaries: Iterable[BursaryRecord],
    view: ViewContext,
) -> Decimal:
    """
    Outstanding balance for the viewed term.

    (term billings + effective starting balance) - bursary - term payments.
    Negative means the student is in credit.
    """
    return (
        compute_total_billing(student_id, billings, bursaries, view)
        - compute_total_payments(student_id, payments, view)
    )

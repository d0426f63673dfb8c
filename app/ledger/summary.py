"""One-call account panel for a student and term."""

from typing import Iterable, Optional

from app.config import settings
from app.ledger.balance import compute_total_billing, compute_total_payments
from app.ledger.clearance import compute_clearance_pct
from app.ledger.status import status_color
from app.ledger.term_view import resolve_view
from app.models.enums import CURRENT_TERM
from app.schemas.ledger import BillingRecord, BursaryRecord, PaymentRecord, StudentRecord
from app.schemas.views import AccountSummary


def summarize_account(
    student: StudentRecord,
    billings: Iterable[BillingRecord],
    payments: Iterable[PaymentRecord],
    bursaries: Iterable[BursaryRecord],
    requested_term: Optional[str] = CURRENT_TERM,
    probation_threshold: Optional[float] = None,
) -> AccountSummary:
    billings = list(billings)
    payments = list(payments)
    bursaries = list(bursaries)
    view = resolve_view(student, requested_term)

    total_billing = compute_total_billing(student.id, billings, bursaries, view)
    total_payments = compute_total_payments(student.id, payments, view)
    percentage = compute_clearance_pct(student, billings, payments, bursaries)
    if probation_threshold is None:
        probation_threshold = settings.PROBATION_THRESHOLD_PCT

    return AccountSummary(
        student_id=student.id,
        view=view,
        total_billing=total_billing,
        total_payments=total_payments,
        outstanding_balance=total_billing - total_payments,
        clearance_percentage=percentage,
        account_status=student.account_status,
        status_color=status_color(
            student.account_status,
            percentage,
            probation_threshold=probation_threshold,
            clearance_threshold=settings.CLEARANCE_THRESHOLD_PCT,
        ),
    )

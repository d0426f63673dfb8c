"""Transaction list for one term view."""

from typing import Iterable, List, Optional

from app.ledger.arrears import has_brought_forward_bill
from app.ledger.balance import term_billings, term_payments
from app.models.enums import BillingType, PaymentType
from app.schemas.ledger import BillingRecord, PaymentRecord, StudentRecord
from app.schemas.views import LedgerRow, RealTransaction, SyntheticDisplayRow, ViewContext
from app.utils.time import get_utc_today

ADJUSTMENT_MARKERS = {"adjustment", "balance fix"}


def _is_adjustment(*labels: Optional[str]) -> bool:
    return any((label or "").lower() in ADJUSTMENT_MARKERS for label in labels)


def billing_row(billing: BillingRecord) -> RealTransaction:
    particulars = "Tuition Fee" if billing.type == BillingType.TUITION.value else (billing.description or billing.type)
    return RealTransaction(
        source="billing",
        record_id=billing.id,
        entry_date=billing.billed_on,
        amount=billing.amount,
        term=billing.term,
        particulars=particulars,
        description=billing.description,
        status=billing.status.value,
        is_adjustment=_is_adjustment(billing.type),
    )


def payment_row(payment: PaymentRecord, fallback_term: str) -> RealTransaction:
    is_adjustment = payment.type == PaymentType.ADJUSTMENT or _is_adjustment(payment.method)
    if payment.allocations:
        particulars = ", ".join(payment.allocations)
    else:
        particulars = "Adjustment" if is_adjustment else "Payment"
    return RealTransaction(
        source="payment",
        record_id=payment.id,
        entry_date=payment.paid_on,
        amount=payment.amount,
        term=payment.term or fallback_term,
        particulars=particulars,
        description=payment.description or "",
        reference=payment.reference,
        allocations=dict(payment.allocations) or None,
        status=payment.status.value,
        is_adjustment=is_adjustment,
    )


def build_statement(
    student: Optional[StudentRecord],
    billings: Iterable[BillingRecord],
    payments: Iterable[PaymentRecord],
    view: ViewContext,
) -> List[LedgerRow]:
    """
    Payments and billings for the viewed term, oldest first.

    When the starting balance is not on the ledger as a brought-forward
    bill, a display-only "Brought Forward" row stands in for it.
    """
    if student is None:
        return []

    scoped_billings = term_billings(student.id, billings, view.target_term)
    scoped_payments = term_payments(student.id, payments, view.target_term, view.is_current)

    rows: List[LedgerRow] = [payment_row(p, student.semester) for p in scoped_payments]
    rows.extend(billing_row(b) for b in scoped_billings)

    if not has_brought_forward_bill(scoped_billings) and view.start_prev_bal > 0:
        rows.append(
            SyntheticDisplayRow(
                display_key=f"prev-bal-{student.id}-{view.target_term}",
                entry_date=student.enrollment_date or get_utc_today(),
                amount=view.start_prev_bal,
                term=view.target_term,
                particulars="Brought Forward",
                description="Balance brought forward",
                reference="B/F",
            )
        )

    # Stable sort; the brought-forward row leads on ties
    return sorted(rows, key=lambda row: (row.entry_date, row.kind != "synthetic"))

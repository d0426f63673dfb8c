"""Collections by account group, with warnings for unmatched payment methods"""

from decimal import Decimal
from typing import Dict, Iterable

from app.models.enums import AccountGroup, PaymentType
from app.schemas.ledger import AccountRecord, PaymentRecord
from app.schemas.views import CollectionsReport, IntegrityWarning

ZERO = Decimal("0")
CASH_METHOD = "cash"


def collections_by_group(
    payments: Iterable[PaymentRecord],
    accounts: Iterable[AccountRecord],
) -> CollectionsReport:
    """
    Sum real payments per account group.

    A payment whose method names no known account is still counted in
    ``orphaned_total`` and reported as a warning. Adjustments are not cash
    movements and are skipped.
    """
    groups: Dict[str, AccountGroup] = {a.name.strip().lower(): a.group for a in accounts}
    totals: Dict[AccountGroup, Decimal] = {group: ZERO for group in AccountGroup}
    orphaned = ZERO
    warnings = []

    for payment in payments:
        if payment.type == PaymentType.ADJUSTMENT:
            continue
        method = (payment.method or "").strip().lower()
        group = groups.get(method)
        if group is None and method == CASH_METHOD:
            group = AccountGroup.CASH

        if group is None:
            orphaned += payment.amount
            warnings.append(
                IntegrityWarning(
                    payment_id=payment.id,
                    method=payment.method,
                    amount=payment.amount,
                    message=f"Payment method '{payment.method}' does not match any account",
                )
            )
            continue
        totals[group] += payment.amount

    return CollectionsReport(totals=totals, orphaned_total=orphaned, warnings=warnings)

"""Brought-forward / arrears recognition.

Every calculator decides "is this term's starting balance already on the
ledger?" through these functions, so the balance and clearance figures can
never disagree about double counting.
"""

import re
from typing import Iterable, Optional

from app.schemas.ledger import BillingRecord

# "bf" is matched as a bare substring and hits words like "subfolder".
# Kept for parity with existing ledgers; flagged for product review.
ARREARS_PATTERN = re.compile(r"brought\s*forward|bf|arrears|prev|balance\s*b/f", re.IGNORECASE)


def is_arrears_item(text: Optional[str]) -> bool:
    """True when a free-text label names a brought-forward / arrears line."""
    if not text:
        return False
    return ARREARS_PATTERN.search(text) is not None


def is_brought_forward_billing(billing: BillingRecord) -> bool:
    """
    A billing carries a brought-forward balance when it is flagged, or when
    its type or description reads like arrears. A False flag does not
    override the text.
    """
    return (
        billing.is_brought_forward is True
        or is_arrears_item(billing.type)
        or is_arrears_item(billing.description)
    )


def has_brought_forward_bill(billings: Iterable[BillingRecord]) -> bool:
    return any(is_brought_forward_billing(b) for b in billings)

"""Account status colouring and manual status transitions."""

from datetime import datetime
from typing import Optional, Union

from app.core.exceptions import LedgerValidationError
from app.models.enums import AccountStatus, StatusColor
from app.schemas.ledger import ClearanceHistoryEntry, StudentRecord
from app.utils.time import get_utc_now

STATUS_COLORS = {
    AccountStatus.CLEARANCE: StatusColor.GREEN,
    AccountStatus.PROBATION: StatusColor.PURPLE,
    AccountStatus.DEFAULTER: StatusColor.RED,
}


def classify_percentage(
    percentage: float,
    probation_threshold: float = 80.0,
    clearance_threshold: float = 100.0,
) -> AccountStatus:
    """Status a clearance percentage suggests. Never applied automatically."""
    if percentage >= clearance_threshold:
        return AccountStatus.CLEARANCE
    if percentage >= probation_threshold:
        return AccountStatus.PROBATION
    return AccountStatus.DEFAULTER


def status_color(
    account_status: Optional[Union[AccountStatus, str]],
    percentage: float,
    probation_threshold: float = 80.0,
    clearance_threshold: float = 100.0,
) -> StatusColor:
    """An explicit status wins; with none set, the percentage picks the colour."""
    if account_status:
        try:
            return STATUS_COLORS[AccountStatus(account_status)]
        except ValueError:
            pass
    return STATUS_COLORS[classify_percentage(percentage, probation_threshold, clearance_threshold)]


def apply_status_change(
    student: StudentRecord,
    new_status: AccountStatus,
    reason: str,
    user: Optional[str] = None,
    now: Optional[datetime] = None,
) -> StudentRecord:
    """
    Return a copy of ``student`` moved to ``new_status``.

    Raises:
        LedgerValidationError: reason is blank or the status is unchanged
    """
    reason = (reason or "").strip()
    if not reason:
        raise LedgerValidationError("A reason is required to change account status")
    new_status = AccountStatus(new_status)
    if student.account_status == new_status:
        raise LedgerValidationError(f"Account status is already {new_status.value}")

    entry = ClearanceHistoryEntry(
        changed_at=now or get_utc_now(),
        status=new_status,
        reason=reason,
        user=user,
        is_manual=True,
    )
    return student.model_copy(
        update={
            "account_status": new_status,
            "clearance_history": [*student.clearance_history, entry],
        }
    )

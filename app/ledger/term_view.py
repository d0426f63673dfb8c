"""Resolve which term a student is being viewed in and what state applies to it."""

from decimal import Decimal
from typing import List, Optional

from app.models.enums import CURRENT_TERM, NO_BURSARY
from app.schemas.ledger import PromotionHistoryEntry, StudentRecord
from app.schemas.views import ViewContext

HISTORICAL_SUFFIX = "(Hist)"


def normalize_term(requested_term: Optional[str]) -> str:
    """Strip the "(Hist)" marker term pickers append to past terms."""
    term = (requested_term or "").strip()
    if term.endswith(HISTORICAL_SUFFIX):
        term = term[: -len(HISTORICAL_SUFFIX)].strip()
    return term or CURRENT_TERM


def entry_into(student: StudentRecord, term: str) -> Optional[PromotionHistoryEntry]:
    """The promotion that started ``term``, if any."""
    return next((h for h in student.promotion_history if h.to_semester == term), None)


def entry_out_of(student: StudentRecord, term: str) -> Optional[PromotionHistoryEntry]:
    """The promotion that ended ``term``, if the student has since left it."""
    return next((h for h in student.promotion_history if h.from_semester == term), None)


def resolve_view(student: Optional[StudentRecord], requested_term: Optional[str] = CURRENT_TERM) -> ViewContext:
    """
    Build the snapshot context for ``requested_term``.

    Starting balance comes from the promotion into the term, then the live
    student (current term only), then the promotion out of the term.
    Requirements, bursary and services come from the promotion out of the
    term when the student has left it, otherwise from the live student.

    Args:
        student: Student record, or None for an unknown student
        requested_term: A term label, "Current", or a "<term> (Hist)" label

    Returns:
        A new ViewContext; the student is never modified
    """
    if student is None:
        return ViewContext()

    term = normalize_term(requested_term)
    is_current = term == CURRENT_TERM or term == student.semester
    target_term = student.semester if is_current else term

    start_history = entry_into(student, target_term)
    end_history = entry_out_of(student, target_term)

    if start_history is not None:
        start_prev_bal = start_history.previous_balance
    elif is_current:
        start_prev_bal = student.previous_balance
    elif end_history is not None and end_history.initial_previous_balance is not None:
        start_prev_bal = end_history.initial_previous_balance
    else:
        start_prev_bal = Decimal("0")

    if end_history is not None:
        requirements = tuple(end_history.requirements_snapshot)
        bursary_id = end_history.bursary_snapshot or NO_BURSARY
        services_ids = tuple(end_history.services_snapshot)
    else:
        requirements = tuple(student.physical_requirements)
        bursary_id = student.bursary or NO_BURSARY
        services_ids = tuple(student.services)

    return ViewContext(
        is_current=is_current,
        target_term=target_term,
        start_prev_bal=start_prev_bal,
        requirements=requirements,
        bursary_id=bursary_id,
        services_ids=services_ids,
    )


def list_viewable_terms(student: Optional[StudentRecord]) -> List[str]:
    """Current term first, then every term the student has left, most recent first."""
    if student is None:
        return []
    terms = [student.semester]
    for entry in reversed(student.promotion_history):
        if entry.from_semester not in terms:
            terms.append(entry.from_semester)
    return terms

"""Unit tests for term view resolution."""

from datetime import datetime
from decimal import Decimal

from app.ledger.term_view import list_viewable_terms, normalize_term, resolve_view
from app.models.enums import NO_BURSARY
from app.schemas.ledger import PhysicalRequirement, PromotionHistoryEntry
from tests.factories import make_student


def _promoted_student():
    """Sem 1 -> Sem 2 -> Sem 3, now in Sem 3."""
    old_reqs = (PhysicalRequirement(name="Reams", required=2, brought=2),)
    return make_student(
        semester="Sem 3",
        # Differs from the entry into Sem 3 so the precedence is visible
        previous_balance=Decimal("-40"),
        bursary="full",
        services=["bus"],
        physical_requirements=[PhysicalRequirement(name="Gloves", required=1)],
        promotion_history=[
            PromotionHistoryEntry(
                promoted_at=datetime(2024, 5, 1),
                from_semester="Sem 1",
                to_semester="Sem 2",
                previous_balance=Decimal("0"),
                initial_previous_balance=Decimal("300"),
                snapshot_arrears=Decimal("200"),
                bursary_snapshot="half",
                services_snapshot=("meals",),
                requirements_snapshot=old_reqs,
            ),
            PromotionHistoryEntry(
                promoted_at=datetime(2024, 9, 1),
                from_semester="Sem 2",
                to_semester="Sem 3",
                previous_balance=Decimal("-50"),
                initial_previous_balance=Decimal("0"),
                snapshot_arrears=Decimal("-50"),
                bursary_snapshot=None,
            ),
        ],
    )


def test_none_student_gives_default_view():
    view = resolve_view(None, "Sem 1")
    assert view.is_current is True
    assert view.target_term == ""
    assert view.start_prev_bal == 0
    assert view.requirements == ()
    assert view.bursary_id == NO_BURSARY
    assert view.services_ids == ()


def test_current_view_without_history_uses_live_state():
    student = make_student(previous_balance=Decimal("120"), bursary="half", services=["bus"])
    view = resolve_view(student, "Current")
    assert view.is_current
    assert view.target_term == "Sem 2"
    assert view.start_prev_bal == Decimal("120")
    assert view.bursary_id == "half"
    assert view.services_ids == ("bus",)


def test_current_label_or_own_term_are_the_same_view():
    student = _promoted_student()
    assert resolve_view(student, "Current") == resolve_view(student, "Sem 3")


def test_current_view_prefers_entry_into_term():
    view = resolve_view(_promoted_student(), "Current")
    assert view.start_prev_bal == Decimal("-50")
    assert view.bursary_id == "full"
    assert [r.name for r in view.requirements] == ["Gloves"]


def test_historical_view_uses_snapshots():
    view = resolve_view(_promoted_student(), "Sem 1")
    assert not view.is_current
    assert view.target_term == "Sem 1"
    # No promotion into Sem 1; falls back to the state before leaving it
    assert view.start_prev_bal == Decimal("300")
    assert view.bursary_id == "half"
    assert view.services_ids == ("meals",)
    assert view.requirements[0].brought == 2


def test_middle_term_uses_entry_in_and_snapshot_out():
    view = resolve_view(_promoted_student(), "Sem 2")
    assert view.start_prev_bal == Decimal("0")
    # Empty bursary snapshot means no bursary
    assert view.bursary_id == NO_BURSARY
    assert view.services_ids == ()


def test_hist_suffix_is_stripped():
    student = _promoted_student()
    assert resolve_view(student, "Sem 1 (Hist)") == resolve_view(student, "Sem 1")
    assert normalize_term(" Sem 1 (Hist) ") == "Sem 1"
    assert normalize_term("") == "Current"
    assert normalize_term(None) == "Current"


def test_unknown_term_has_zero_start():
    view = resolve_view(_promoted_student(), "Sem 9")
    assert not view.is_current
    assert view.start_prev_bal == 0
    assert view.bursary_id == "full"


def test_view_is_idempotent_and_does_not_mutate_student():
    student = _promoted_student()
    before = student.model_dump()
    first = resolve_view(student, "Sem 1")
    second = resolve_view(student, "Sem 1")
    assert first == second
    assert student.model_dump() == before


def test_list_viewable_terms():
    assert list_viewable_terms(_promoted_student()) == ["Sem 3", "Sem 2", "Sem 1"]
    assert list_viewable_terms(None) == []


def test_past_terms_ignore_later_live_changes():
    student = _promoted_student()
    before = {term: resolve_view(student, f"{term} (Hist)") for term in ("Sem 1", "Sem 2")}

    changed = student.model_copy(
        update={
            "previous_balance": Decimal("9999"),
            "bursary": "half",
            "services": ["gym", "meals"],
            "physical_requirements": [PhysicalRequirement(name="Boots", required=4)],
        }
    )

    for term, view in before.items():
        assert resolve_view(changed, f"{term} (Hist)") == view
    assert resolve_view(changed, "Current") != resolve_view(student, "Current")

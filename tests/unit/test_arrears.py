"""Unit tests for brought-forward / arrears recognition."""

import pytest

from app.ledger.arrears import has_brought_forward_bill, is_arrears_item, is_brought_forward_billing
from tests.factories import make_billing, make_student


@pytest.mark.parametrize("text", [
    "Balance Brought Forward",
    "broughtforward",
    "BF 2023",
    "Arrears",
    "Prev Bal",
    "Previous Balance",
    "balance b/f",
])
def test_arrears_labels_match(text):
    assert is_arrears_item(text)


@pytest.mark.parametrize("text", ["Tuition", "Transport", "Lunch", "", None])
def test_ordinary_labels_do_not_match(text):
    assert not is_arrears_item(text)


def test_bare_bf_substring_matches():
    """Known false positive: "bf" anywhere in the label."""
    assert is_arrears_item("Subfolder fee")


def test_text_match_counts_even_when_flag_is_false():
    student = make_student()
    described = make_billing(student, 100, type="Adjustment", description="Balance Brought Forward",
                             is_brought_forward=False)
    typed = make_billing(student, 100, type="Arrears", description="", is_brought_forward=False)
    assert is_brought_forward_billing(described)
    assert is_brought_forward_billing(typed)


def test_flag_alone_is_enough():
    student = make_student()
    carrier = make_billing(student, 100, type="Misc", description="x", is_brought_forward=True)
    assert is_brought_forward_billing(carrier)


def test_unflagged_plain_billing_is_not_brought_forward():
    student = make_student()
    assert not is_brought_forward_billing(
        make_billing(student, 100, type="Tuition", description="Tuition", is_brought_forward=False)
    )


def test_text_match_when_flag_missing():
    student = make_student()
    legacy = make_billing(student, 100, type="Arrears", description="")
    assert legacy.is_brought_forward is None
    assert is_brought_forward_billing(legacy)


def test_has_brought_forward_bill():
    student = make_student()
    assert not has_brought_forward_bill([make_billing(student, 100)])
    assert has_brought_forward_bill([
        make_billing(student, 100),
        make_billing(student, 50, type="Balance Brought Forward", is_brought_forward=True),
    ])
    assert not has_brought_forward_bill([])

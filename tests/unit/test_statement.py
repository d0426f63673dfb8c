"""Unit tests for statement rows."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import TypeAdapter, ValidationError

from app.ledger.statement import build_statement
from app.ledger.term_view import resolve_view
from app.schemas.views import LedgerRow, RealTransaction, SyntheticDisplayRow
from tests.factories import make_billing, make_payment, make_student


def test_synthetic_row_for_unbilled_starting_balance():
    student = make_student(previous_balance=Decimal("400"))
    billings = [make_billing(student, 1000)]
    payments = [make_payment(student, 300, allocations={"Tuition": Decimal("300")})]
    rows = build_statement(student, billings, payments, resolve_view(student, "Current"))

    assert len(rows) == 3
    synthetic = [r for r in rows if isinstance(r, SyntheticDisplayRow)]
    assert len(synthetic) == 1
    assert synthetic[0].amount == Decimal("400")
    assert synthetic[0].reference == "B/F"
    assert synthetic[0].particulars == "Brought Forward"
    assert not hasattr(synthetic[0], "record_id")
    # Enrolment date is earliest, so it leads
    assert rows[0] is synthetic[0]


def test_no_synthetic_row_when_bf_bill_exists():
    student = make_student(previous_balance=Decimal("400"))
    billings = [make_billing(student, 400, type="Balance Brought Forward", is_brought_forward=True)]
    rows = build_statement(student, billings, [], resolve_view(student, "Current"))
    assert all(isinstance(r, RealTransaction) for r in rows)


def test_no_synthetic_row_for_credit_start():
    student = make_student(previous_balance=Decimal("-100"))
    rows = build_statement(student, [], [], resolve_view(student, "Current"))
    assert rows == []


def test_rows_are_sorted_by_date_and_labelled():
    student = make_student()
    billings = [make_billing(student, 1000, billed_on=date(2024, 1, 10))]
    payments = [
        make_payment(student, 100, paid_on=date(2024, 3, 1), method="Adjustment"),
        make_payment(student, 200, paid_on=date(2024, 1, 5), term=None),
    ]
    rows = build_statement(student, billings, payments, resolve_view(student, "Current"))

    assert [r.entry_date for r in rows] == [date(2024, 1, 5), date(2024, 1, 10), date(2024, 3, 1)]
    assert rows[0].source == "payment"
    assert rows[0].term == "Sem 2"
    assert rows[0].particulars == "Payment"
    assert rows[1].particulars == "Tuition Fee"
    assert rows[2].is_adjustment
    assert rows[2].particulars == "Adjustment"


def test_rows_serialise_through_the_union():
    student = make_student(previous_balance=Decimal("10"))
    rows = build_statement(student, [make_billing(student, 5)], [], resolve_view(student, "Current"))
    adapter = TypeAdapter(list[LedgerRow])
    parsed = adapter.validate_python(adapter.dump_python(rows))
    assert {type(r) for r in parsed} == {RealTransaction, SyntheticDisplayRow}


def test_display_row_cannot_be_edited():
    student = make_student(previous_balance=Decimal("10"))
    row = build_statement(student, [], [], resolve_view(student, "Current"))[0]
    with pytest.raises(ValidationError):
        row.amount = Decimal("0")


def test_unknown_student_has_empty_statement():
    assert build_statement(None, [], [], resolve_view(None)) == []

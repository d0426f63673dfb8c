"""Unit tests for LedgerService over the in-memory store."""

from decimal import Decimal
from uuid import uuid4

import pytest

from app.core.exceptions import CorrectionRejected, LedgerValidationError, RecordNotFoundError
from app.models.enums import AccountStatus, AuditCategory, EnrollmentStatus, PaymentType, PromotionAction
from app.schemas.ledger import BillingCreate, BursaryRecord, PaymentCreate, PaymentRecord, ServiceRecord
from app.schemas.student import PromotionRequest
from app.services.ledger_service import LedgerService
from app.services.store import InMemoryLedgerStore
from tests.factories import make_student


async def _seed(store: InMemoryLedgerStore, **student_fields):
    student = await store.add_student(make_student(**student_fields))
    await store.add_billing(BillingCreate(student_id=student.id, term=student.semester, amount=Decimal("200000")))
    await store.add_payment(PaymentCreate(student_id=student.id, amount=Decimal("100000")))
    return student


@pytest.mark.asyncio
async def test_summary(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store, previous_balance=Decimal("50000"))
    summary = await LedgerService.get_account_summary(memory_store, student.id)

    assert summary.total_billing == Decimal("250000")
    assert summary.total_payments == Decimal("100000")
    assert summary.outstanding_balance == Decimal("150000")
    assert summary.clearance_percentage == 40.0
    assert summary.status_color.value == "#ef4444"


@pytest.mark.asyncio
async def test_unknown_student(memory_store: InMemoryLedgerStore):
    with pytest.raises(RecordNotFoundError):
        await LedgerService.get_account_summary(memory_store, uuid4())


@pytest.mark.asyncio
async def test_correction_credit_reaches_target_and_is_audited(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store, previous_balance=Decimal("50000"))

    record = await LedgerService.apply_correction(memory_store, student.id, Decimal("0"), "Waiver", "Jane")

    assert isinstance(record, PaymentRecord)
    assert record.type == PaymentType.ADJUSTMENT
    assert record.amount == Decimal("150000")
    summary = await LedgerService.get_account_summary(memory_store, student.id)
    assert summary.outstanding_balance == 0

    logs = await memory_store.list_audit_logs()
    assert len(logs) == 1
    assert logs[0].category == AuditCategory.BALANCE_CORRECTION.value
    assert "Waiver" in logs[0].message
    assert logs[0].user == "Jane"


@pytest.mark.asyncio
async def test_correction_debit(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store)
    await LedgerService.apply_correction(memory_store, student.id, Decimal("100500"), "Late fee")
    summary = await LedgerService.get_account_summary(memory_store, student.id)
    assert summary.outstanding_balance == Decimal("100500")


@pytest.mark.asyncio
async def test_correction_rejected_leaves_no_trace(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store)
    with pytest.raises(CorrectionRejected):
        await LedgerService.apply_correction(memory_store, student.id, Decimal("100000"), "same")
    assert len(await memory_store.list_payments(student.id)) == 1
    assert await memory_store.list_audit_logs() == []


@pytest.mark.asyncio
async def test_graduated_student_cannot_be_corrected(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store, status=EnrollmentStatus.GRADUATED)
    with pytest.raises(LedgerValidationError):
        await LedgerService.apply_correction(memory_store, student.id, Decimal("0"), "Waiver")


@pytest.mark.asyncio
async def test_status_change_is_audited(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store)
    updated = await LedgerService.change_account_status(
        memory_store, student.id, AccountStatus.PROBATION, "Payment plan", "Jane"
    )
    assert updated.account_status == AccountStatus.PROBATION
    stored = await memory_store.get_student(student.id)
    assert len(stored.clearance_history) == 1
    logs = await memory_store.list_audit_logs()
    assert logs[0].category == AuditCategory.STATUS_CHANGE.value
    assert "unset -> probation" in logs[0].message


@pytest.mark.asyncio
async def test_delete_requires_reason_and_restores(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store)
    payment = (await memory_store.list_payments(student.id))[0]

    with pytest.raises(LedgerValidationError):
        await LedgerService.delete_payment(memory_store, payment.id, " ")

    await LedgerService.delete_payment(memory_store, payment.id, "Bounced cheque")
    summary = await LedgerService.get_account_summary(memory_store, student.id)
    assert summary.total_payments == 0

    _, trashed = await LedgerService.list_trash(memory_store, student.id)
    assert [p.id for p in trashed] == [payment.id]

    await LedgerService.restore_payment(memory_store, payment.id)
    summary = await LedgerService.get_account_summary(memory_store, student.id)
    assert summary.total_payments == Decimal("100000")
    categories = [log.category for log in await memory_store.list_audit_logs()]
    assert sorted(categories) == ["Payment Deleted", "Payment Restored"]


@pytest.mark.asyncio
async def test_add_billing_for_unknown_student(memory_store: InMemoryLedgerStore):
    with pytest.raises(RecordNotFoundError):
        await LedgerService.add_billing(
            memory_store, BillingCreate(student_id=uuid4(), term="Sem 2", amount=Decimal("1"))
        )


@pytest.mark.asyncio
async def test_promotion_applies_plan(memory_store: InMemoryLedgerStore):
    await memory_store.add_service(ServiceRecord(id="bus", name="Bus", cost=Decimal("3000")))
    student = await _seed(memory_store)

    plan = await LedgerService.promote_student(
        memory_store,
        student.id,
        PromotionRequest(to_semester="Sem 3", tuition_fee=Decimal("200000"), compulsory_services=["bus"]),
    )

    assert plan.arrears == Decimal("100000")
    stored = await memory_store.get_student(student.id)
    assert stored.semester == "Sem 3"
    assert len(stored.promotion_history) == 1

    payments = await memory_store.list_payments(student.id)
    assert {p.term for p in payments} == {"Sem 2"}

    current = await LedgerService.get_account_summary(memory_store, student.id)
    assert current.outstanding_balance == Decimal("303000")
    old = await LedgerService.get_account_summary(memory_store, student.id, "Sem 2 (Hist)")
    assert old.outstanding_balance == Decimal("100000")
    assert await LedgerService.list_terms(memory_store, student.id) == ["Sem 3", "Sem 2"]
    assert (await memory_store.list_audit_logs())[0].category == AuditCategory.PROMOTION.value


@pytest.mark.asyncio
async def test_failed_promotion_changes_nothing(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store)
    with pytest.raises(LedgerValidationError):
        await LedgerService.promote_student(
            memory_store, student.id, PromotionRequest(to_semester="Sem 3", compulsory_services=["gym"])
        )
    stored = await memory_store.get_student(student.id)
    assert stored.semester == "Sem 2"
    assert len(await memory_store.list_billings(student.id)) == 1


@pytest.mark.asyncio
async def test_graduation(memory_store: InMemoryLedgerStore):
    student = await _seed(memory_store)
    plan = await LedgerService.promote_student(
        memory_store, student.id, PromotionRequest(action=PromotionAction.GRADUATE)
    )
    assert plan.entry is None
    assert (await memory_store.get_student(student.id)).status == EnrollmentStatus.GRADUATED


@pytest.mark.asyncio
async def test_bursary_lowers_clearance_denominator(memory_store: InMemoryLedgerStore):
    await memory_store.add_bursary(BursaryRecord(id="half", name="Half", value=Decimal("100000")))
    student = await _seed(memory_store, bursary="half")
    assert await LedgerService.get_clearance(memory_store, student.id) == 100.0


@pytest.mark.asyncio
async def test_collections_report(memory_store: InMemoryLedgerStore):
    await _seed(memory_store)
    report = await LedgerService.collections_report(memory_store)
    # Default method "Cash" maps to the Cash group without a configured account
    assert report.totals["Cash"] == Decimal("100000")
    assert report.warnings == []

"""Unit tests for InMemoryLedgerStore."""

from decimal import Decimal

import pytest

from app.core.exceptions import RecordNotFoundError
from app.schemas.ledger import BillingCreate, PaymentCreate
from app.services.store import InMemoryLedgerStore
from tests.factories import make_student


@pytest.mark.asyncio
async def test_records_are_copied_in_and_out(memory_store: InMemoryLedgerStore):
    student = make_student()
    await memory_store.add_student(student)

    fetched = await memory_store.get_student(student.id)
    fetched.services.append("bus")
    assert (await memory_store.get_student(student.id)).services == []


@pytest.mark.asyncio
async def test_soft_delete_and_restore(memory_store: InMemoryLedgerStore):
    student = await memory_store.add_student(make_student())
    billing = await memory_store.add_billing(
        BillingCreate(student_id=student.id, term="Sem 2", amount=Decimal("100"))
    )

    deleted = await memory_store.delete_billing(billing.id, "duplicate")
    assert deleted.delete_reason == "duplicate"
    assert await memory_store.list_billings(student.id) == []
    assert [b.id for b in await memory_store.list_deleted_billings()] == [billing.id]

    with pytest.raises(RecordNotFoundError):
        await memory_store.delete_billing(billing.id, "again")

    await memory_store.restore_billing(billing.id)
    assert [b.id for b in await memory_store.list_billings(student.id)] == [billing.id]
    with pytest.raises(RecordNotFoundError):
        await memory_store.restore_billing(billing.id)


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(memory_store: InMemoryLedgerStore):
    student = await memory_store.add_student(make_student())

    with pytest.raises(RuntimeError):
        async with memory_store.transaction():
            await memory_store.add_payment(PaymentCreate(student_id=student.id, amount=Decimal("10")))
            raise RuntimeError("boom")

    assert await memory_store.list_payments(student.id) == []


@pytest.mark.asyncio
async def test_update_unknown_student(memory_store: InMemoryLedgerStore):
    with pytest.raises(RecordNotFoundError):
        await memory_store.update_student(make_student())

"""SQL Ledger Store - LedgerStore over an async SQLAlchemy session"""

from contextlib import asynccontextmanager
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import RecordNotFoundError
from app.models.audit import AuditLog
from app.models.catalog import Account, Bursary, Service
from app.models.ledger import Billing, Payment
from app.models.student import PromotionHistory, Student
from app.schemas.ledger import (
    AccountRecord,
    AuditLogRecord,
    BillingCreate,
    BillingRecord,
    BursaryRecord,
    PaymentBase,
    PaymentRecord,
    PromotionHistoryEntry,
    ServiceRecord,
    StudentRecord,
)
from app.services.store import LedgerStore

# Stored as JSONB, so they are dumped in JSON mode
STUDENT_JSON_FIELDS = {"services", "physical_requirements", "clearance_history"}
HISTORY_JSON_FIELDS = {"services_snapshot", "requirements_snapshot"}


def _student_columns(record: StudentRecord) -> dict:
    columns = record.model_dump(exclude=STUDENT_JSON_FIELDS | {"id", "promotion_history"})
    columns.update(record.model_dump(mode="json", include=STUDENT_JSON_FIELDS))
    return columns


def _history_columns(entry: PromotionHistoryEntry) -> dict:
    columns = entry.model_dump(exclude=HISTORY_JSON_FIELDS)
    columns.update(entry.model_dump(mode="json", include=HISTORY_JSON_FIELDS))
    return columns


def _payment_columns(payment: PaymentBase) -> dict:
    columns = payment.model_dump(exclude={"allocations", "id", "deleted_at", "delete_reason"})
    columns["allocations"] = payment.model_dump(mode="json", include={"allocations"})["allocations"]
    return columns


class SqlLedgerStore(LedgerStore):
    """
    Each method flushes so generated ids and defaults are visible; the
    session is committed by ``transaction()`` or by the request's get_db.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self):
        try:
            yield self
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _save(self, row):
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return row

    # Students
    async def _get_student_row(self, student_id: UUID) -> Student:
        result = await self.db.execute(select(Student).where(Student.id == student_id))
        row = result.scalar_one_or_none()
        if row is None:
            raise RecordNotFoundError("student", student_id)
        return row

    async def get_student(self, student_id: UUID) -> Optional[StudentRecord]:
        result = await self.db.execute(select(Student).where(Student.id == student_id))
        row = result.scalar_one_or_none()
        return StudentRecord.model_validate(row) if row else None

    async def list_students(self) -> List[StudentRecord]:
        result = await self.db.execute(select(Student).order_by(Student.full_name))
        return [StudentRecord.model_validate(row) for row in result.scalars().all()]

    async def add_student(self, student: StudentRecord) -> StudentRecord:
        row = Student(id=student.id, **_student_columns(student))
        for entry in student.promotion_history:
            row.promotion_history.append(PromotionHistory(**_history_columns(entry)))
        return StudentRecord.model_validate(await self._save(row))

    async def update_student(self, student: StudentRecord) -> StudentRecord:
        row = await self._get_student_row(student.id)
        for key, value in _student_columns(student).items():
            setattr(row, key, value)

        # History rows are append-only
        known = {h.id for h in row.promotion_history}
        for entry in student.promotion_history:
            if entry.id not in known:
                row.promotion_history.append(PromotionHistory(**_history_columns(entry)))

        return StudentRecord.model_validate(await self._save(row))

    # Ledger
    async def list_billings(self, student_id: Optional[UUID] = None) -> List[BillingRecord]:
        query = select(Billing).where(Billing.deleted_at.is_(None))
        if student_id is not None:
            query = query.where(Billing.student_id == student_id)
        result = await self.db.execute(query.order_by(Billing.billed_on, Billing.created_at))
        return [BillingRecord.model_validate(row) for row in result.scalars().all()]

    async def list_payments(self, student_id: Optional[UUID] = None) -> List[PaymentRecord]:
        query = select(Payment).where(Payment.deleted_at.is_(None))
        if student_id is not None:
            query = query.where(Payment.student_id == student_id)
        result = await self.db.execute(query.order_by(Payment.paid_on, Payment.created_at))
        return [PaymentRecord.model_validate(row) for row in result.scalars().all()]

    async def add_billing(self, billing: BillingCreate) -> BillingRecord:
        row = await self._save(Billing(**billing.model_dump()))
        return BillingRecord.model_validate(row)

    async def add_payment(self, payment: PaymentBase) -> PaymentRecord:
        row = await self._save(Payment(**_payment_columns(payment)))
        return PaymentRecord.model_validate(row)

    async def update_payment(self, payment: PaymentRecord) -> PaymentRecord:
        row = await self.db.get(Payment, payment.id)
        if row is None:
            raise RecordNotFoundError("payment", payment.id)
        for key, value in _payment_columns(payment).items():
            setattr(row, key, value)
        return PaymentRecord.model_validate(await self._save(row))

    async def _trash_row(self, model, kind: str, record_id: UUID, reason: Optional[str], deleting: bool):
        row = await self.db.get(model, record_id)
        if row is None or row.is_deleted == deleting:
            raise RecordNotFoundError(kind, record_id)
        if deleting:
            row.soft_delete(reason)
        else:
            row.restore()
        return await self._save(row)

    async def delete_billing(self, billing_id: UUID, reason: str) -> BillingRecord:
        row = await self._trash_row(Billing, "billing", billing_id, reason, deleting=True)
        return BillingRecord.model_validate(row)

    async def delete_payment(self, payment_id: UUID, reason: str) -> PaymentRecord:
        row = await self._trash_row(Payment, "payment", payment_id, reason, deleting=True)
        return PaymentRecord.model_validate(row)

    async def restore_billing(self, billing_id: UUID) -> BillingRecord:
        row = await self._trash_row(Billing, "billing", billing_id, None, deleting=False)
        return BillingRecord.model_validate(row)

    async def restore_payment(self, payment_id: UUID) -> PaymentRecord:
        row = await self._trash_row(Payment, "payment", payment_id, None, deleting=False)
        return PaymentRecord.model_validate(row)

    async def list_deleted_billings(self) -> List[BillingRecord]:
        result = await self.db.execute(
            select(Billing).where(Billing.deleted_at.is_not(None)).order_by(Billing.deleted_at.desc())
        )
        return [BillingRecord.model_validate(row) for row in result.scalars().all()]

    async def list_deleted_payments(self) -> List[PaymentRecord]:
        result = await self.db.execute(
            select(Payment).where(Payment.deleted_at.is_not(None)).order_by(Payment.deleted_at.desc())
        )
        return [PaymentRecord.model_validate(row) for row in result.scalars().all()]

    # Catalog
    async def list_bursaries(self) -> List[BursaryRecord]:
        result = await self.db.execute(select(Bursary).order_by(Bursary.name))
        return [BursaryRecord.model_validate(row) for row in result.scalars().all()]

    async def list_services(self) -> List[ServiceRecord]:
        result = await self.db.execute(select(Service).order_by(Service.name))
        return [ServiceRecord.model_validate(row) for row in result.scalars().all()]

    async def list_accounts(self) -> List[AccountRecord]:
        result = await self.db.execute(select(Account).order_by(Account.name))
        return [AccountRecord.model_validate(row) for row in result.scalars().all()]

    async def add_bursary(self, bursary: BursaryRecord) -> BursaryRecord:
        return BursaryRecord.model_validate(await self._save(Bursary(**bursary.model_dump())))

    async def add_service(self, service: ServiceRecord) -> ServiceRecord:
        return ServiceRecord.model_validate(await self._save(Service(**service.model_dump())))

    async def add_account(self, account: AccountRecord) -> AccountRecord:
        return AccountRecord.model_validate(await self._save(Account(**account.model_dump())))

    # Audit
    async def add_audit_log(self, entry: AuditLogRecord) -> AuditLogRecord:
        return AuditLogRecord.model_validate(await self._save(AuditLog(**entry.model_dump())))

    async def list_audit_logs(self, limit: Optional[int] = None) -> List[AuditLogRecord]:
        query = select(AuditLog).order_by(AuditLog.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [AuditLogRecord.model_validate(row) for row in result.scalars().all()]

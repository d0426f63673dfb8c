"""Ledger Store - persistence contract plus an in-process implementation"""

import abc
import asyncio
import copy
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional
from uuid import UUID, uuid4

from app.core.exceptions import RecordNotFoundError
from app.schemas.ledger import (
    AccountRecord,
    AuditLogRecord,
    BillingCreate,
    BillingRecord,
    BursaryRecord,
    PaymentBase,
    PaymentRecord,
    ServiceRecord,
    StudentRecord,
)
from app.utils.time import get_utc_now


class LedgerStore(abc.ABC):
    """
    Everything the ledger services need from storage.

    ``list_billings`` and ``list_payments`` return active (not trashed) rows
    only. Mutations that must land together run inside ``transaction()``.
    """

    @abc.abstractmethod
    def transaction(self):
        """Async context manager; all changes inside commit or none do."""

    # Students
    @abc.abstractmethod
    async def get_student(self, student_id: UUID) -> Optional[StudentRecord]: ...

    @abc.abstractmethod
    async def list_students(self) -> List[StudentRecord]: ...

    @abc.abstractmethod
    async def add_student(self, student: StudentRecord) -> StudentRecord: ...

    @abc.abstractmethod
    async def update_student(self, student: StudentRecord) -> StudentRecord: ...

    # Ledger
    @abc.abstractmethod
    async def list_billings(self, student_id: Optional[UUID] = None) -> List[BillingRecord]: ...

    @abc.abstractmethod
    async def list_payments(self, student_id: Optional[UUID] = None) -> List[PaymentRecord]: ...

    @abc.abstractmethod
    async def add_billing(self, billing: BillingCreate) -> BillingRecord: ...

    @abc.abstractmethod
    async def add_payment(self, payment: PaymentBase) -> PaymentRecord: ...

    @abc.abstractmethod
    async def update_payment(self, payment: PaymentRecord) -> PaymentRecord: ...

    @abc.abstractmethod
    async def delete_billing(self, billing_id: UUID, reason: str) -> BillingRecord: ...

    @abc.abstractmethod
    async def delete_payment(self, payment_id: UUID, reason: str) -> PaymentRecord: ...

    @abc.abstractmethod
    async def restore_billing(self, billing_id: UUID) -> BillingRecord: ...

    @abc.abstractmethod
    async def restore_payment(self, payment_id: UUID) -> PaymentRecord: ...

    @abc.abstractmethod
    async def list_deleted_billings(self) -> List[BillingRecord]: ...

    @abc.abstractmethod
    async def list_deleted_payments(self) -> List[PaymentRecord]: ...

    # Catalog
    @abc.abstractmethod
    async def list_bursaries(self) -> List[BursaryRecord]: ...

    @abc.abstractmethod
    async def list_services(self) -> List[ServiceRecord]: ...

    @abc.abstractmethod
    async def list_accounts(self) -> List[AccountRecord]: ...

    @abc.abstractmethod
    async def add_bursary(self, bursary: BursaryRecord) -> BursaryRecord: ...

    @abc.abstractmethod
    async def add_service(self, service: ServiceRecord) -> ServiceRecord: ...

    @abc.abstractmethod
    async def add_account(self, account: AccountRecord) -> AccountRecord: ...

    # Audit
    @abc.abstractmethod
    async def add_audit_log(self, entry: AuditLogRecord) -> AuditLogRecord: ...

    @abc.abstractmethod
    async def list_audit_logs(self, limit: Optional[int] = None) -> List[AuditLogRecord]: ...


class InMemoryLedgerStore(LedgerStore):
    """
    Dict-backed store used by tests and local tooling.

    Records are copied on the way in and out so callers can never mutate
    stored state by accident. ``transaction()`` serializes writers and puts
    the previous state back if the block raises.
    """

    def __init__(self) -> None:
        self.students: Dict[UUID, StudentRecord] = {}
        self.billings: Dict[UUID, BillingRecord] = {}
        self.payments: Dict[UUID, PaymentRecord] = {}
        self.bursaries: Dict[str, BursaryRecord] = {}
        self.services: Dict[str, ServiceRecord] = {}
        self.accounts: Dict[UUID, AccountRecord] = {}
        self.audit_logs: List[AuditLogRecord] = []
        self._lock = asyncio.Lock()

    def _state(self) -> tuple:
        return (
            self.students, self.billings, self.payments,
            self.bursaries, self.services, self.accounts, self.audit_logs,
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["InMemoryLedgerStore"]:
        async with self._lock:
            snapshot = copy.deepcopy(self._state())
            try:
                yield self
            except Exception:
                (
                    self.students, self.billings, self.payments,
                    self.bursaries, self.services, self.accounts, self.audit_logs,
                ) = snapshot
                raise

    # Students
    async def get_student(self, student_id: UUID) -> Optional[StudentRecord]:
        student = self.students.get(student_id)
        return student.model_copy(deep=True) if student else None

    async def list_students(self) -> List[StudentRecord]:
        return [s.model_copy(deep=True) for s in sorted(self.students.values(), key=lambda s: s.full_name)]

    async def add_student(self, student: StudentRecord) -> StudentRecord:
        self.students[student.id] = student.model_copy(deep=True)
        return student.model_copy(deep=True)

    async def update_student(self, student: StudentRecord) -> StudentRecord:
        if student.id not in self.students:
            raise RecordNotFoundError("student", student.id)
        self.students[student.id] = student.model_copy(deep=True)
        return student.model_copy(deep=True)

    # Ledger
    async def list_billings(self, student_id: Optional[UUID] = None) -> List[BillingRecord]:
        return [
            b.model_copy(deep=True) for b in self.billings.values()
            if b.deleted_at is None and (student_id is None or b.student_id == student_id)
        ]

    async def list_payments(self, student_id: Optional[UUID] = None) -> List[PaymentRecord]:
        return [
            p.model_copy(deep=True) for p in self.payments.values()
            if p.deleted_at is None and (student_id is None or p.student_id == student_id)
        ]

    async def add_billing(self, billing: BillingCreate) -> BillingRecord:
        record = BillingRecord(id=uuid4(), **billing.model_dump())
        self.billings[record.id] = record
        return record.model_copy(deep=True)

    async def add_payment(self, payment: PaymentBase) -> PaymentRecord:
        record = PaymentRecord(id=uuid4(), **payment.model_dump())
        self.payments[record.id] = record
        return record.model_copy(deep=True)

    async def update_payment(self, payment: PaymentRecord) -> PaymentRecord:
        if payment.id not in self.payments:
            raise RecordNotFoundError("payment", payment.id)
        self.payments[payment.id] = payment.model_copy(deep=True)
        return payment.model_copy(deep=True)

    def _set_deleted(self, table: dict, kind: str, record_id: UUID, deleted: bool, reason: Optional[str] = None):
        record = table.get(record_id)
        if record is None or (record.deleted_at is not None) == deleted:
            raise RecordNotFoundError(kind, record_id)
        update = {"deleted_at": get_utc_now(), "delete_reason": reason} if deleted else {"deleted_at": None, "delete_reason": None}
        table[record_id] = record.model_copy(update=update)
        return table[record_id].model_copy(deep=True)

    async def delete_billing(self, billing_id: UUID, reason: str) -> BillingRecord:
        return self._set_deleted(self.billings, "billing", billing_id, True, reason)

    async def delete_payment(self, payment_id: UUID, reason: str) -> PaymentRecord:
        return self._set_deleted(self.payments, "payment", payment_id, True, reason)

    async def restore_billing(self, billing_id: UUID) -> BillingRecord:
        return self._set_deleted(self.billings, "billing", billing_id, False)

    async def restore_payment(self, payment_id: UUID) -> PaymentRecord:
        return self._set_deleted(self.payments, "payment", payment_id, False)

    async def list_deleted_billings(self) -> List[BillingRecord]:
        return [b.model_copy(deep=True) for b in self.billings.values() if b.deleted_at is not None]

    async def list_deleted_payments(self) -> List[PaymentRecord]:
        return [p.model_copy(deep=True) for p in self.payments.values() if p.deleted_at is not None]

    # Catalog
    async def list_bursaries(self) -> List[BursaryRecord]:
        return list(self.bursaries.values())

    async def list_services(self) -> List[ServiceRecord]:
        return list(self.services.values())

    async def list_accounts(self) -> List[AccountRecord]:
        return list(self.accounts.values())

    async def add_bursary(self, bursary: BursaryRecord) -> BursaryRecord:
        self.bursaries[bursary.id] = bursary
        return bursary

    async def add_service(self, service: ServiceRecord) -> ServiceRecord:
        self.services[service.id] = service
        return service

    async def add_account(self, account: AccountRecord) -> AccountRecord:
        self.accounts[account.id] = account
        return account

    # Audit
    async def add_audit_log(self, entry: AuditLogRecord) -> AuditLogRecord:
        self.audit_logs.append(entry)
        return entry

    async def list_audit_logs(self, limit: Optional[int] = None) -> List[AuditLogRecord]:
        logs = sorted(self.audit_logs, key=lambda e: e.created_at, reverse=True)
        return logs[:limit] if limit is not None else logs

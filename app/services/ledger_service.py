"""Ledger Service - loads records, runs the reconciliation engine, writes results"""

import logging
from decimal import Decimal
from typing import List, Optional, Tuple, Union
from uuid import UUID

from app.core.exceptions import LedgerValidationError, RecordNotFoundError
from app.ledger.clearance import compute_clearance_pct
from app.ledger.correction import build_correction_record, plan_correction
from app.ledger.integrity import collections_by_group
from app.ledger.promotion import plan_promotion
from app.ledger.requirements import adjust_requirement
from app.ledger.statement import build_statement
from app.ledger.status import apply_status_change
from app.ledger.summary import summarize_account
from app.ledger.term_view import list_viewable_terms, resolve_view
from app.models.enums import AccountStatus, AuditCategory, CURRENT_TERM, EnrollmentStatus
from app.schemas.ledger import (
    BillingCreate,
    BillingRecord,
    BursaryRecord,
    PaymentCreate,
    PaymentRecord,
    StudentRecord,
)
from app.schemas.student import PromotionRequest
from app.schemas.views import AccountSummary, CollectionsReport, LedgerRow, PromotionPlan, ViewContext
from app.services.audit_service import AuditService
from app.services.store import LedgerStore

logger = logging.getLogger(__name__)

LedgerSnapshot = Tuple[StudentRecord, List[BillingRecord], List[PaymentRecord], List[BursaryRecord]]


class LedgerService:
    @staticmethod
    async def get_student(store: LedgerStore, student_id: UUID) -> StudentRecord:
        student = await store.get_student(student_id)
        if student is None:
            raise RecordNotFoundError("student", student_id)
        return student

    @staticmethod
    async def load_ledger(store: LedgerStore, student_id: UUID) -> LedgerSnapshot:
        student = await LedgerService.get_student(store, student_id)
        billings = await store.list_billings(student_id)
        payments = await store.list_payments(student_id)
        bursaries = await store.list_bursaries()
        return student, billings, payments, bursaries

    # Read side
    @staticmethod
    async def get_account_summary(
        store: LedgerStore,
        student_id: UUID,
        term: Optional[str] = CURRENT_TERM,
    ) -> AccountSummary:
        student, billings, payments, bursaries = await LedgerService.load_ledger(store, student_id)
        return summarize_account(student, billings, payments, bursaries, term)

    @staticmethod
    async def get_view(store: LedgerStore, student_id: UUID, term: Optional[str] = CURRENT_TERM) -> ViewContext:
        student = await LedgerService.get_student(store, student_id)
        return resolve_view(student, term)

    @staticmethod
    async def list_terms(store: LedgerStore, student_id: UUID) -> List[str]:
        student = await LedgerService.get_student(store, student_id)
        return list_viewable_terms(student)

    @staticmethod
    async def get_statement(
        store: LedgerStore,
        student_id: UUID,
        term: Optional[str] = CURRENT_TERM,
    ) -> List[LedgerRow]:
        student, billings, payments, _ = await LedgerService.load_ledger(store, student_id)
        return build_statement(student, billings, payments, resolve_view(student, term))

    @staticmethod
    async def get_clearance(store: LedgerStore, student_id: UUID) -> float:
        student, billings, payments, bursaries = await LedgerService.load_ledger(store, student_id)
        return compute_clearance_pct(student, billings, payments, bursaries)

    @staticmethod
    async def collections_report(store: LedgerStore) -> CollectionsReport:
        report = collections_by_group(await store.list_payments(), await store.list_accounts())
        for warning in report.warnings:
            logger.warning(warning.message, extra={"category": "Orphaned Account"})
        return report

    # Write side
    @staticmethod
    async def add_billing(store: LedgerStore, billing: BillingCreate) -> BillingRecord:
        await LedgerService.get_student(store, billing.student_id)
        async with store.transaction():
            record = await store.add_billing(billing)
        logger.info("Billing added", extra={"student_id": billing.student_id})
        return record

    @staticmethod
    async def record_payment(store: LedgerStore, payment: PaymentCreate) -> PaymentRecord:
        await LedgerService.get_student(store, payment.student_id)
        async with store.transaction():
            record = await store.add_payment(payment)
        logger.info("Payment recorded", extra={"student_id": payment.student_id})
        return record

    @staticmethod
    async def apply_correction(
        store: LedgerStore,
        student_id: UUID,
        target_balance: Decimal,
        reason: str,
        user: Optional[str] = None,
    ) -> Union[PaymentRecord, BillingRecord]:
        """
        Add the single adjustment record that moves the current-term balance
        to ``target_balance``, and audit it.

        Raises:
            RecordNotFoundError: unknown student
            LedgerValidationError: graduated student
            CorrectionRejected: missing reason, or the balance already matches
        """
        student, billings, payments, bursaries = await LedgerService.load_ledger(store, student_id)
        if student.status == EnrollmentStatus.GRADUATED:
            raise LedgerValidationError("Cannot correct the balance of a graduated student")

        current = summarize_account(student, billings, payments, bursaries).outstanding_balance
        plan = plan_correction(current, target_balance, reason)
        new_record = build_correction_record(plan, student, recorded_by=user)

        async with store.transaction():
            if isinstance(new_record, PaymentCreate):
                saved = await store.add_payment(new_record)
            else:
                saved = await store.add_billing(new_record)
            await AuditService.log_action(
                store,
                AuditCategory.BALANCE_CORRECTION,
                f"Fixed balance for {student.full_name}: {current} -> {target_balance} "
                f"({plan.kind.value} {plan.amount}). Reason: {plan.reason}",
                user,
            )
        return saved

    @staticmethod
    async def change_account_status(
        store: LedgerStore,
        student_id: UUID,
        new_status: AccountStatus,
        reason: str,
        user: Optional[str] = None,
    ) -> StudentRecord:
        student = await LedgerService.get_student(store, student_id)
        old_status = student.account_status
        updated = apply_status_change(student, new_status, reason, user=user)

        async with store.transaction():
            saved = await store.update_student(updated)
            await AuditService.log_action(
                store,
                AuditCategory.STATUS_CHANGE,
                f"{student.full_name}: {old_status.value if old_status else 'unset'} -> "
                f"{updated.account_status.value}. Reason: {reason.strip()}",
                user,
            )
        return saved

    @staticmethod
    async def delete_billing(store: LedgerStore, billing_id: UUID, reason: str, user: Optional[str] = None) -> BillingRecord:
        reason = _required_reason(reason)
        async with store.transaction():
            record = await store.delete_billing(billing_id, reason)
            await AuditService.log_action(
                store,
                AuditCategory.BILLING_DELETED,
                f"Billing {record.description or record.type} ({record.amount}, {record.term}) moved to trash. Reason: {reason}",
                user,
            )
        return record

    @staticmethod
    async def restore_billing(store: LedgerStore, billing_id: UUID, user: Optional[str] = None) -> BillingRecord:
        async with store.transaction():
            record = await store.restore_billing(billing_id)
            await AuditService.log_action(
                store,
                AuditCategory.BILLING_RESTORED,
                f"Billing {record.description or record.type} ({record.amount}, {record.term}) restored",
                user,
            )
        return record

    @staticmethod
    async def delete_payment(store: LedgerStore, payment_id: UUID, reason: str, user: Optional[str] = None) -> PaymentRecord:
        reason = _required_reason(reason)
        async with store.transaction():
            record = await store.delete_payment(payment_id, reason)
            await AuditService.log_action(
                store,
                AuditCategory.PAYMENT_DELETED,
                f"Payment {record.receipt_number or record.id} ({record.amount}) moved to trash. Reason: {reason}",
                user,
            )
        return record

    @staticmethod
    async def restore_payment(store: LedgerStore, payment_id: UUID, user: Optional[str] = None) -> PaymentRecord:
        async with store.transaction():
            record = await store.restore_payment(payment_id)
            await AuditService.log_action(
                store,
                AuditCategory.PAYMENT_RESTORED,
                f"Payment {record.receipt_number or record.id} ({record.amount}) restored",
                user,
            )
        return record

    @staticmethod
    async def list_trash(
        store: LedgerStore,
        student_id: Optional[UUID] = None,
    ) -> Tuple[List[BillingRecord], List[PaymentRecord]]:
        billings = [b for b in await store.list_deleted_billings() if student_id in (None, b.student_id)]
        payments = [p for p in await store.list_deleted_payments() if student_id in (None, p.student_id)]
        return billings, payments

    @staticmethod
    async def promote_student(
        store: LedgerStore,
        student_id: UUID,
        request: PromotionRequest,
        user: Optional[str] = None,
    ) -> PromotionPlan:
        """Close the student's current term and apply the plan in one transaction."""
        student, billings, payments, bursaries = await LedgerService.load_ledger(store, student_id)
        plan = plan_promotion(
            student,
            request.to_semester,
            billings,
            payments,
            bursaries,
            services=await store.list_services(),
            action=request.action,
            tuition_fee=request.tuition_fee,
            compulsory_services=request.compulsory_services,
            new_requirements=request.requirements,
        )

        async with store.transaction():
            for payment in plan.retagged_payments:
                await store.update_payment(payment)
            for billing in plan.new_billings:
                await store.add_billing(billing)
            await store.update_student(plan.student)

            if plan.entry is not None:
                message = (
                    f"{student.full_name} promoted {plan.entry.from_semester} -> {plan.entry.to_semester}, "
                    f"arrears {plan.arrears}"
                )
            else:
                message = f"{student.full_name} {plan.student.status.value} with arrears {plan.arrears}"
            await AuditService.log_action(store, AuditCategory.PROMOTION, message, user)

        logger.info("Promotion applied", extra={"student_id": student_id, "category": request.action.value})
        return plan

    @staticmethod
    async def update_requirement(store: LedgerStore, student_id: UUID, name: str, change: int) -> StudentRecord:
        student = await LedgerService.get_student(store, student_id)
        updated = adjust_requirement(student, name, change)
        async with store.transaction():
            return await store.update_student(updated)


def _required_reason(reason: Optional[str]) -> str:
    reason = (reason or "").strip()
    if not reason:
        raise LedgerValidationError("A reason is required to move a record to trash")
    return reason

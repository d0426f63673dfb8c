from typing import Any, List, Union
from fastapi import APIRouter, Depends, Query, status
from uuid import UUID

from app.api import deps
from app.models.enums import CURRENT_TERM
from app.schemas.ledger import BillingRecord, PaymentRecord, StudentRecord
from app.schemas.responses import PaginatedResponse, SuccessResponse, paginate
from app.schemas.student import (
    CorrectionRequest,
    PromotionRequest,
    RequirementChangeRequest,
    StatusChangeRequest,
    StudentCreate,
)
from app.schemas.views import AccountSummary, LedgerRow, PromotionPlan, ViewContext
from app.services.ledger_service import LedgerService
from app.services.store import LedgerStore
from app.services.student_service import StudentService

router = APIRouter()


@router.post("", response_model=SuccessResponse[StudentRecord], status_code=status.HTTP_201_CREATED)
async def create_student(
    data: StudentCreate,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    student = await StudentService.create_student(store, data)
    return SuccessResponse(data=student, message="Student created")


@router.get("", response_model=PaginatedResponse[StudentRecord])
async def list_students(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    students = await StudentService.list_students(store)
    return PaginatedResponse(**paginate(students, page, limit))


@router.get("/{student_id}", response_model=SuccessResponse[StudentRecord])
async def get_student(
    student_id: UUID,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    student = await LedgerService.get_student(store, student_id)
    return SuccessResponse(data=student, message="Student retrieved")


@router.get("/{student_id}/view", response_model=SuccessResponse[ViewContext])
async def get_term_view(
    student_id: UUID,
    term: str = CURRENT_TERM,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    """Snapshot context (starting balance, bursary, requirements) for a term."""
    view = await LedgerService.get_view(store, student_id, term)
    return SuccessResponse(data=view, message="Term view resolved")


@router.get("/{student_id}/summary", response_model=SuccessResponse[AccountSummary])
async def get_account_summary(
    student_id: UUID,
    term: str = CURRENT_TERM,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    summary = await LedgerService.get_account_summary(store, student_id, term)
    return SuccessResponse(data=summary, message="Account summary retrieved")


@router.get("/{student_id}/statement", response_model=SuccessResponse[List[LedgerRow]])
async def get_statement(
    student_id: UUID,
    term: str = CURRENT_TERM,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    rows = await LedgerService.get_statement(store, student_id, term)
    return SuccessResponse(data=rows, message="Statement retrieved")


@router.get("/{student_id}/terms", response_model=SuccessResponse[List[str]])
async def list_terms(
    student_id: UUID,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    terms = await LedgerService.list_terms(store, student_id)
    return SuccessResponse(data=terms, message="Terms retrieved")


@router.get("/{student_id}/clearance", response_model=SuccessResponse[float])
async def get_clearance(
    student_id: UUID,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    """Tuition clearance percentage for the live current term."""
    pct = await LedgerService.get_clearance(store, student_id)
    return SuccessResponse(data=pct, message="Clearance computed")


@router.post("/{student_id}/status", response_model=SuccessResponse[StudentRecord])
async def change_account_status(
    student_id: UUID,
    data: StatusChangeRequest,
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    student = await LedgerService.change_account_status(store, student_id, data.status, data.reason, actor)
    return SuccessResponse(data=student, message="Account status updated")


@router.post(
    "/{student_id}/corrections",
    response_model=SuccessResponse[Union[PaymentRecord, BillingRecord]],
    status_code=status.HTTP_201_CREATED,
)
async def apply_correction(
    student_id: UUID,
    data: CorrectionRequest,
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    """Add one adjustment record that moves the current balance to the target."""
    record = await LedgerService.apply_correction(store, student_id, data.target_balance, data.reason, actor)
    return SuccessResponse(data=record, message="Balance corrected")


@router.post("/{student_id}/promotions", response_model=SuccessResponse[PromotionPlan])
async def promote_student(
    student_id: UUID,
    data: PromotionRequest,
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    plan = await LedgerService.promote_student(store, student_id, data, actor)
    return SuccessResponse(data=plan, message="Promotion applied")


@router.post("/{student_id}/requirements", response_model=SuccessResponse[StudentRecord])
async def update_requirement(
    student_id: UUID,
    data: RequirementChangeRequest,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    student = await LedgerService.update_requirement(store, student_id, data.name, data.change)
    return SuccessResponse(data=student, message="Requirement updated")

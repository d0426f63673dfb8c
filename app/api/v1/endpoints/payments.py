from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from uuid import UUID

from app.api import deps
from app.schemas.ledger import PaymentCreate, PaymentRecord
from app.schemas.responses import SuccessResponse
from app.services.ledger_service import LedgerService
from app.services.store import LedgerStore

router = APIRouter()


@router.post("", response_model=SuccessResponse[PaymentRecord], status_code=status.HTTP_201_CREATED)
async def record_payment(
    data: PaymentCreate,
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    if not data.recorded_by:
        data = data.model_copy(update={"recorded_by": actor})
    payment = await LedgerService.record_payment(store, data)
    return SuccessResponse(data=payment, message="Payment recorded")


@router.get("/trash", response_model=SuccessResponse[List[PaymentRecord]])
async def list_trashed_payments(
    student_id: Optional[UUID] = None,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    _, payments = await LedgerService.list_trash(store, student_id)
    return SuccessResponse(data=payments, message="Trashed payments retrieved")


@router.delete("/{payment_id}", response_model=SuccessResponse[PaymentRecord])
async def delete_payment(
    payment_id: UUID,
    reason: str = Query(..., min_length=1),
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    """Move a payment to the trash. It stops counting towards any balance."""
    payment = await LedgerService.delete_payment(store, payment_id, reason, actor)
    return SuccessResponse(data=payment, message="Payment moved to trash")


@router.post("/{payment_id}/restore", response_model=SuccessResponse[PaymentRecord])
async def restore_payment(
    payment_id: UUID,
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    payment = await LedgerService.restore_payment(store, payment_id, actor)
    return SuccessResponse(data=payment, message="Payment restored")

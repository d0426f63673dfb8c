from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from uuid import UUID

from app.api import deps
from app.schemas.ledger import BillingCreate, BillingRecord
from app.schemas.responses import SuccessResponse
from app.services.ledger_service import LedgerService
from app.services.store import LedgerStore

router = APIRouter()


@router.post("", response_model=SuccessResponse[BillingRecord], status_code=status.HTTP_201_CREATED)
async def create_billing(
    data: BillingCreate,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    billing = await LedgerService.add_billing(store, data)
    return SuccessResponse(data=billing, message="Billing added")


@router.get("/trash", response_model=SuccessResponse[List[BillingRecord]])
async def list_trashed_billings(
    student_id: Optional[UUID] = None,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    billings, _ = await LedgerService.list_trash(store, student_id)
    return SuccessResponse(data=billings, message="Trashed billings retrieved")


@router.delete("/{billing_id}", response_model=SuccessResponse[BillingRecord])
async def delete_billing(
    billing_id: UUID,
    reason: str = Query(..., min_length=1),
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    """Move a billing to the trash. It stops counting towards any balance."""
    billing = await LedgerService.delete_billing(store, billing_id, reason, actor)
    return SuccessResponse(data=billing, message="Billing moved to trash")


@router.post("/{billing_id}/restore", response_model=SuccessResponse[BillingRecord])
async def restore_billing(
    billing_id: UUID,
    store: LedgerStore = Depends(deps.get_ledger_store),
    actor: str = Depends(deps.get_actor),
) -> Any:
    billing = await LedgerService.restore_billing(store, billing_id, actor)
    return SuccessResponse(data=billing, message="Billing restored")

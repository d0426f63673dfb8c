from typing import Any
from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.responses import SuccessResponse
from app.schemas.views import CollectionsReport
from app.services.ledger_service import LedgerService
from app.services.store import LedgerStore

router = APIRouter()


@router.get("/collections", response_model=SuccessResponse[CollectionsReport])
async def collections_report(store: LedgerStore = Depends(deps.get_ledger_store)) -> Any:
    """Collections per account group, with payments whose method matches no account."""
    report = await LedgerService.collections_report(store)
    message = f"{len(report.warnings)} integrity warning(s)" if report.warnings else "Collections computed"
    return SuccessResponse(data=report, message=message)

from typing import Any
from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.schemas.ledger import AuditLogRecord
from app.schemas.responses import PaginatedResponse, paginate
from app.services.audit_service import AuditService
from app.services.store import LedgerStore

router = APIRouter()


@router.get("", response_model=PaginatedResponse[AuditLogRecord])
async def list_audit_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    """Audit entries, newest first."""
    logs = await AuditService.list_logs(store)
    return PaginatedResponse(**paginate(logs, page, limit))

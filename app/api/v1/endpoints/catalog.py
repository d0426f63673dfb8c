from typing import Any, List
from fastapi import APIRouter, Depends, status

from app.api import deps
from app.schemas.ledger import AccountRecord, BursaryRecord, ServiceRecord
from app.schemas.responses import SuccessResponse
from app.services.catalog_service import CatalogService
from app.services.store import LedgerStore

router = APIRouter()


@router.get("/bursaries", response_model=SuccessResponse[List[BursaryRecord]])
async def list_bursaries(store: LedgerStore = Depends(deps.get_ledger_store)) -> Any:
    return SuccessResponse(data=await CatalogService.list_bursaries(store), message="Bursaries retrieved")


@router.post("/bursaries", response_model=SuccessResponse[BursaryRecord], status_code=status.HTTP_201_CREATED)
async def create_bursary(
    data: BursaryRecord,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    bursary = await CatalogService.add_bursary(store, data)
    return SuccessResponse(data=bursary, message="Bursary created")


@router.get("/services", response_model=SuccessResponse[List[ServiceRecord]])
async def list_services(store: LedgerStore = Depends(deps.get_ledger_store)) -> Any:
    return SuccessResponse(data=await CatalogService.list_services(store), message="Services retrieved")


@router.post("/services", response_model=SuccessResponse[ServiceRecord], status_code=status.HTTP_201_CREATED)
async def create_service(
    data: ServiceRecord,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    service = await CatalogService.add_service(store, data)
    return SuccessResponse(data=service, message="Service created")


@router.get("/accounts", response_model=SuccessResponse[List[AccountRecord]])
async def list_accounts(store: LedgerStore = Depends(deps.get_ledger_store)) -> Any:
    return SuccessResponse(data=await CatalogService.list_accounts(store), message="Accounts retrieved")


@router.post("/accounts", response_model=SuccessResponse[AccountRecord], status_code=status.HTTP_201_CREATED)
async def create_account(
    data: AccountRecord,
    store: LedgerStore = Depends(deps.get_ledger_store),
) -> Any:
    account = await CatalogService.add_account(store, data)
    return SuccessResponse(data=account, message="Account created")

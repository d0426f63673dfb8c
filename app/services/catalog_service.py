"""Catalog Service - bursaries, services and receiving accounts"""

from typing import List

from app.core.exceptions import LedgerValidationError
from app.models.enums import NO_BURSARY
from app.schemas.ledger import AccountRecord, BursaryRecord, ServiceRecord
from app.services.store import LedgerStore


class CatalogService:
    @staticmethod
    async def add_bursary(store: LedgerStore, bursary: BursaryRecord) -> BursaryRecord:
        if bursary.id == NO_BURSARY:
            raise LedgerValidationError(f"'{NO_BURSARY}' is reserved for students without a bursary")
        if any(b.id == bursary.id for b in await store.list_bursaries()):
            raise LedgerValidationError(f"Bursary {bursary.id} already exists")
        async with store.transaction():
            return await store.add_bursary(bursary)

    @staticmethod
    async def add_service(store: LedgerStore, service: ServiceRecord) -> ServiceRecord:
        if any(s.id == service.id for s in await store.list_services()):
            raise LedgerValidationError(f"Service {service.id} already exists")
        async with store.transaction():
            return await store.add_service(service)

    @staticmethod
    async def add_account(store: LedgerStore, account: AccountRecord) -> AccountRecord:
        name = account.name.strip().lower()
        if any(a.name.strip().lower() == name for a in await store.list_accounts()):
            raise LedgerValidationError(f"Account {account.name} already exists")
        async with store.transaction():
            return await store.add_account(account)

    @staticmethod
    async def list_bursaries(store: LedgerStore) -> List[BursaryRecord]:
        return await store.list_bursaries()

    @staticmethod
    async def list_services(store: LedgerStore) -> List[ServiceRecord]:
        return await store.list_services()

    @staticmethod
    async def list_accounts(store: LedgerStore) -> List[AccountRecord]:
        return await store.list_accounts()

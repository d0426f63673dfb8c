"""API Dependencies"""

from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.services.sql_store import SqlLedgerStore
from app.services.store import LedgerStore


async def get_ledger_store(db: AsyncSession = Depends(get_db)) -> LedgerStore:
    """
    Ledger store bound to the request's database session.

    Tests override this dependency with an InMemoryLedgerStore.
    """
    return SqlLedgerStore(db)


async def get_actor(x_user: Optional[str] = Header(None)) -> str:
    """
    Name recorded against audited actions.

    Taken from the X-User header set by the gateway; falls back to the
    configured default actor.
    """
    actor = (x_user or "").strip()
    return actor or settings.DEFAULT_ACTOR

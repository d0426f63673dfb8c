"""Audit Service - records sensitive ledger actions"""

import logging
from typing import List, Optional, Union

from app.config import settings
from app.models.enums import AuditCategory
from app.schemas.ledger import AuditLogRecord
from app.services.store import LedgerStore

logger = logging.getLogger(__name__)


class AuditService:
    @staticmethod
    async def log_action(
        store: LedgerStore,
        category: Union[AuditCategory, str],
        message: str,
        user: Optional[str] = None,
    ) -> AuditLogRecord:
        """Persist an audit entry and mirror it to the structured log."""
        category = category.value if isinstance(category, AuditCategory) else category
        entry = await store.add_audit_log(
            AuditLogRecord(category=category, message=message, user=user or settings.DEFAULT_ACTOR)
        )
        logger.info(message, extra={"category": category, "user": entry.user})
        return entry

    @staticmethod
    async def list_logs(store: LedgerStore, limit: Optional[int] = None) -> List[AuditLogRecord]:
        return await store.list_audit_logs(limit=limit)

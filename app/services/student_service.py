"""Student Service - ledger account registration and lookup"""

import logging
from typing import List

from app.core.exceptions import LedgerValidationError
from app.models.enums import NO_BURSARY
from app.schemas.ledger import StudentRecord
from app.schemas.student import StudentCreate
from app.services.store import LedgerStore

logger = logging.getLogger(__name__)


class StudentService:
    @staticmethod
    async def create_student(store: LedgerStore, data: StudentCreate) -> StudentRecord:
        """Register a student; bursary and services must exist in the catalog."""
        if data.bursary != NO_BURSARY:
            bursary_ids = {b.id for b in await store.list_bursaries()}
            if data.bursary not in bursary_ids:
                raise LedgerValidationError(f"Unknown bursary: {data.bursary}")
        if data.services:
            service_ids = {s.id for s in await store.list_services()}
            missing = [s for s in data.services if s not in service_ids]
            if missing:
                raise LedgerValidationError(f"Unknown services: {', '.join(missing)}")

        async with store.transaction():
            student = await store.add_student(data.to_record())
        logger.info("Student registered", extra={"student_id": student.id})
        return student

    @staticmethod
    async def list_students(store: LedgerStore) -> List[StudentRecord]:
        return await store.list_students()

"""Physical requirement tracking"""

from app.core.exceptions import LedgerValidationError
from app.schemas.ledger import StudentRecord


def adjust_requirement(student: StudentRecord, name: str, change: int) -> StudentRecord:
    """Record items brought (positive change) or returned (negative). Never below zero."""
    if not any(r.name == name for r in student.physical_requirements):
        raise LedgerValidationError(f"Unknown requirement: {name}")

    updated = [
        r.model_copy(update={"brought": max(0, r.brought + change)}) if r.name == name else r
        for r in student.physical_requirements
    ]
    return student.model_copy(update={"physical_requirements": updated})

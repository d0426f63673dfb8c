"""Request bodies for student ledger endpoints"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from app.models.enums import AccountStatus, NO_BURSARY, PromotionAction
from app.schemas.ledger import PhysicalRequirement, StudentRecord


class StudentCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    semester: str = Field(..., min_length=1)
    pay_code: Optional[str] = None
    programme: Optional[str] = None
    previous_balance: Decimal = Decimal("0")
    bursary: str = NO_BURSARY
    services: List[str] = []
    physical_requirements: List[PhysicalRequirement] = []
    enrollment_date: Optional[date] = None

    def to_record(self) -> StudentRecord:
        return StudentRecord(id=uuid4(), **self.model_dump())


class StatusChangeRequest(BaseModel):
    status: AccountStatus
    reason: str = Field(..., min_length=1)


class CorrectionRequest(BaseModel):
    """Move the current-term balance to ``target_balance``"""
    target_balance: Decimal
    reason: str = Field(..., min_length=1)


class PromotionRequest(BaseModel):
    action: PromotionAction = PromotionAction.PROMOTE
    to_semester: Optional[str] = None
    tuition_fee: Optional[Decimal] = Field(None, ge=0)
    compulsory_services: List[str] = []
    requirements: List[PhysicalRequirement] = []


class RequirementChangeRequest(BaseModel):
    name: str
    change: int = Field(..., description="Items brought (positive) or returned (negative)")

"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, SoftDeleteMixin
from app.models.enums import *
from app.models.student import Student, PromotionHistory
from app.models.ledger import Billing, Payment
from app.models.catalog import Bursary, Service, Account
from app.models.audit import AuditLog


__all__ = [
    # Base classes
    "BaseModel",
    "SoftDeleteMixin",

    # Students
    "Student",
    "PromotionHistory",

    # Ledger
    "Billing",
    "Payment",

    # Catalog
    "Bursary",
    "Service",
    "Account",

    # Audit
    "AuditLog",
]

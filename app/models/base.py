"""Base Models and Mixins shared by the ledger tables"""

import uuid
from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.

    Provides:
    - UUID primary key
    - created_at timestamp
    - updated_at timestamp
    """
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class SoftDeleteMixin:
    """
    Mixin for soft delete functionality.

    Ledger rows are never removed; a deleted row leaves every calculation
    and can be restored from the trash.

    Provides:
    - deleted_at timestamp (NULL = active, NOT NULL = deleted)
    - delete_reason recorded with the deletion
    """
    deleted_at = Column(DateTime, nullable=True, index=True)
    delete_reason = Column(String(500), nullable=True)

    def soft_delete(self, reason: str = None):
        """Mark record as deleted without removing from database"""
        self.deleted_at = get_utc_now()
        self.delete_reason = reason

    def restore(self):
        """Restore a soft-deleted record"""
        self.deleted_at = None
        self.delete_reason = None

    @property
    def is_deleted(self) -> bool:
        """Check if record is soft-deleted"""
        return self.deleted_at is not None

"""Domain 4: Audit Log Model"""

from sqlalchemy import Column, String, Text

from app.models.base import BaseModel


class AuditLog(BaseModel):
    """Append-only record of sensitive ledger actions"""
    __tablename__ = "audit_logs"

    category = Column(String(100), nullable=False, index=True)
    message = Column(Text, nullable=False)
    user = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<AuditLog {self.category}>"

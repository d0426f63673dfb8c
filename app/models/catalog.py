"""Domain 3: Fee Catalog Models"""

from sqlalchemy import Column, Numeric, String
from sqlalchemy.dialects.postgresql import ENUM

from app.database import Base
from app.models.base import BaseModel
from app.models.enums import AccountGroup


class Bursary(Base):
    """Flat discount, referenced from students by its string id"""
    __tablename__ = "bursaries"

    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False)
    value = Column(Numeric(12, 2), default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Bursary {self.id} {self.value}>"


class Service(Base):
    """Optional or compulsory billable service (transport, meals, ...)"""
    __tablename__ = "services"

    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False)
    cost = Column(Numeric(12, 2), default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Service {self.id} {self.cost}>"


class Account(BaseModel):
    """Receiving account; payment methods are matched to it by name"""
    __tablename__ = "accounts"

    name = Column(String(255), nullable=False, unique=True)
    group = Column(
        ENUM(AccountGroup, name="account_group", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Account {self.name} ({self.group})>"

"""SQLAlchemy model for companies managed by a user."""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID, Money, utcnow


class Company(Base):
    """Root entity owning monthly figures and yearly targets."""

    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("capitale_sociale >= 0", name="ck_companies_capital_non_negative"),
    )

    id = Column("company_id", GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    capitale_sociale = Column(Money(), nullable=False, default=Decimal("0"))
    user_id = Column(
        GUID(),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    owner = relationship("User", back_populates="companies")
    monthly_data = relationship(
        "MonthlyBusinessData",
        back_populates="company",
        cascade="all, delete-orphan",
    )
    targets = relationship(
        "BusinessTarget",
        back_populates="company",
        cascade="all, delete-orphan",
    )


Index("companies_user_created_idx", Company.user_id, Company.created_at)

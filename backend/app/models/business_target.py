"""SQLAlchemy model for yearly business targets."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID, Money, utcnow


class BusinessTarget(Base):
    """Optional revenue, margin and net income thresholds for a year."""

    __tablename__ = "business_targets"
    __table_args__ = (
        UniqueConstraint("company_id", "year", name="business_targets_company_year_key"),
    )

    id = Column("target_id", GUID(), primary_key=True, default=uuid.uuid4)
    company_id = Column(
        GUID(),
        ForeignKey("companies.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    year = Column(Integer, nullable=False)
    target_ricavi = Column(Money(), nullable=True)
    target_margine = Column(Money(), nullable=True)
    target_utile_netto = Column(Money(), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    company = relationship("Company", back_populates="targets")

"""SQLAlchemy model for the monthly figures of a company."""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID, Money, utcnow


class MonthlyBusinessData(Base):
    """Revenue and costs of one company for one month.

    ``margine`` and ``utile_netto`` are derived values written by the
    monthly data service; at most one row exists per company and period.
    """

    __tablename__ = "monthly_business_data"
    __table_args__ = (
        UniqueConstraint("company_id", "year", "month", name="monthly_business_data_period_key"),
        CheckConstraint("month >= 1 AND month <= 12", name="ck_monthly_business_data_month"),
    )

    id = Column("monthly_data_id", GUID(), primary_key=True, default=uuid.uuid4)
    company_id = Column(
        GUID(),
        ForeignKey("companies.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    ricavi = Column(Money(), nullable=False, default=Decimal("0"))
    costi_diretti = Column(Money(), nullable=False, default=Decimal("0"))
    costi_totali = Column(Money(), nullable=False, default=Decimal("0"))
    compenso_imprenditore = Column(Money(), nullable=False, default=Decimal("0"))
    margine = Column(Money(), nullable=False, default=Decimal("0"))
    utile_netto = Column(Money(), nullable=False, default=Decimal("0"))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    company = relationship("Company", back_populates="monthly_data")

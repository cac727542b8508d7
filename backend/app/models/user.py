"""SQLAlchemy model for authenticated users."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID, utcnow


class User(Base):
    """Account able to own companies."""

    __tablename__ = "users"

    id = Column("user_id", GUID(), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    # Company currently selected in the workspace; not a foreign key so the
    # users/companies tables do not depend on each other.
    selected_company_id = Column(GUID(), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    companies = relationship("Company", back_populates="owner")

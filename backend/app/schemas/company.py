"""Pydantic schemas for companies."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..db_types import MAX_AMOUNT

from .common import ListResponse


class CompanyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Company name")
    description: Optional[str] = Field(default=None, description="Short description")
    capitale_sociale: Decimal = Field(
        default=Decimal("0"), ge=0, le=MAX_AMOUNT, description="Share capital"
    )


class CompanyCreate(CompanyBase):
    """Schema used to create companies."""

    pass


class CompanyUpdate(CompanyBase):
    """Full replacement of the editable company fields."""

    pass


class CompanyRead(CompanyBase):
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompanyListResponse(ListResponse[CompanyRead]):
    pass

"""Pydantic schemas for yearly business targets."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..db_types import MAX_AMOUNT

from .common import ListResponse


class TargetValues(BaseModel):
    target_ricavi: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    target_margine: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    target_utile_netto: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)


class TargetUpsert(TargetValues):
    """Thresholds left out are stored as not set."""

    pass


class TargetRead(TargetValues):
    id: str
    company_id: str
    year: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TargetListResponse(ListResponse[TargetRead]):
    pass

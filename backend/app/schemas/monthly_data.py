"""Pydantic schemas for monthly business data."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..db_types import MAX_AMOUNT

from .common import ListResponse, NotificationRead


class MonthlyAmounts(BaseModel):
    ricavi: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT, description="Revenue")
    costi_diretti: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT, description="Direct costs")
    costi_totali: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT, description="Total costs")
    compenso_imprenditore: Decimal = Field(
        default=Decimal("0"), ge=0, le=MAX_AMOUNT, description="Owner compensation"
    )


class MonthlyDataSubmit(MonthlyAmounts):
    """Figures of one period; an existing period is overwritten."""

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1000, le=9999)


class MonthlyDataUpdate(BaseModel):
    """Partial update of the amounts of a stored period."""

    ricavi: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    costi_diretti: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    costi_totali: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    compenso_imprenditore: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)


class MonthlyDataRead(MonthlyAmounts):
    id: str
    company_id: str
    month: int
    year: int
    margine: Decimal
    utile_netto: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MonthlyDataListResponse(ListResponse[MonthlyDataRead]):
    pass


class MonthlyDataSubmitResponse(BaseModel):
    record: MonthlyDataRead
    items: List[MonthlyDataRead]
    notifications: List[NotificationRead] = Field(default_factory=list)

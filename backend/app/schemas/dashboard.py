"""Pydantic schemas for the company dashboard."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..services.derived_metrics import AlertType


class AlertRead(BaseModel):
    type: AlertType
    message: str
    actual: Decimal
    target: Decimal
    level: str = "warning"

    model_config = ConfigDict(from_attributes=True)


class KpiRead(BaseModel):
    key: str
    title: str
    format: str
    value: Optional[Decimal] = None
    previous_value: Optional[Decimal] = None
    change_percentage: Optional[Decimal] = None
    trend: Optional[str] = None
    target: Optional[Decimal] = None
    under_target: bool = False


class TrendPoint(BaseModel):
    label: str
    year: int
    month: int
    ricavi: Decimal
    margine: Decimal
    utile_netto: Decimal


class DashboardResponse(BaseModel):
    company_id: str
    company_name: str
    current_period: Optional[str] = None
    previous_period: Optional[str] = None
    kpis: List[KpiRead]
    alerts: List[AlertRead] = Field(default_factory=list)
    targets_met: int = Field(0, ge=0)
    targets_total: int = Field(0, ge=0)
    trend: List[TrendPoint] = Field(default_factory=list)

"""Pydantic schemas for the workspace commands."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field

from ..db_types import MAX_AMOUNT

from .common import NotificationRead
from .company import CompanyRead
from .dashboard import AlertRead
from .monthly_data import MonthlyDataRead
from .target import TargetRead, TargetValues

# Raw form values; invalid amounts are coerced to zero by the service.
FormAmount = Union[Decimal, str, None]


class WorkspaceSelection(BaseModel):
    company_id: str


class WorkspaceCompanyInput(BaseModel):
    name: str = ""
    description: Optional[str] = None
    capitale_sociale: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)


class WorkspaceMonthlyInput(BaseModel):
    month: Union[int, str]
    year: Union[int, str]
    ricavi: FormAmount = 0
    costi_diretti: FormAmount = 0
    costi_totali: FormAmount = 0
    compenso_imprenditore: FormAmount = 0


class WorkspaceMonthlyChanges(BaseModel):
    ricavi: FormAmount = None
    costi_diretti: FormAmount = None
    costi_totali: FormAmount = None
    compenso_imprenditore: FormAmount = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class WorkspaceTargetsInput(TargetValues):
    year: int = Field(..., ge=1000, le=9999)


class WorkspaceResponse(BaseModel):
    ok: bool = True
    notifications: List[NotificationRead] = Field(default_factory=list)
    companies: List[CompanyRead] = Field(default_factory=list)
    selected_company: Optional[CompanyRead] = None
    monthly_data: List[MonthlyDataRead] = Field(default_factory=list)
    targets: List[TargetRead] = Field(default_factory=list)
    alerts: List[AlertRead] = Field(default_factory=list)

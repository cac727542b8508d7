"""Expose Pydantic schemas for convenient imports."""

from .auth import LoginRequest, RegisterRequest, TokenResponse, UserRead
from .common import ListResponse, NotificationRead
from .company import (
    CompanyBase,
    CompanyCreate,
    CompanyListResponse,
    CompanyRead,
    CompanyUpdate,
)
from .dashboard import AlertRead, DashboardResponse, KpiRead, TrendPoint
from .monthly_data import (
    MonthlyAmounts,
    MonthlyDataListResponse,
    MonthlyDataRead,
    MonthlyDataSubmit,
    MonthlyDataSubmitResponse,
    MonthlyDataUpdate,
)
from .target import TargetListResponse, TargetRead, TargetUpsert, TargetValues
from .workspace import (
    WorkspaceCompanyInput,
    WorkspaceMonthlyChanges,
    WorkspaceMonthlyInput,
    WorkspaceResponse,
    WorkspaceSelection,
    WorkspaceTargetsInput,
)

__all__ = [
    "AlertRead",
    "CompanyBase",
    "CompanyCreate",
    "CompanyListResponse",
    "CompanyRead",
    "CompanyUpdate",
    "DashboardResponse",
    "KpiRead",
    "ListResponse",
    "LoginRequest",
    "MonthlyAmounts",
    "MonthlyDataListResponse",
    "MonthlyDataRead",
    "MonthlyDataSubmit",
    "MonthlyDataSubmitResponse",
    "MonthlyDataUpdate",
    "NotificationRead",
    "RegisterRequest",
    "TargetListResponse",
    "TargetRead",
    "TargetUpsert",
    "TargetValues",
    "TokenResponse",
    "TrendPoint",
    "UserRead",
    "WorkspaceCompanyInput",
    "WorkspaceMonthlyChanges",
    "WorkspaceMonthlyInput",
    "WorkspaceResponse",
    "WorkspaceSelection",
    "WorkspaceTargetsInput",
]

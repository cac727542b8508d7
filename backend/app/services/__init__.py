"""Service layer encapsulating business logic for API routers."""

from .companies import CompanyService
from .dashboard import DashboardService
from .derived_metrics import (
    Alert,
    AlertType,
    BusinessValidationError,
    DerivedMetrics,
    NetIncomeFormula,
    Period,
    compute_alerts,
    compute_derived_metrics,
)
from .monthly_data import MonthlyDataService, SubmissionResult
from .notifications import Notification, NotificationVariant
from .record_store import (
    RecordNotFoundError,
    RecordStore,
    SqlAlchemyRecordStore,
    StoreError,
)
from .targets import TargetService
from .users import UserService, UserServiceError
from .workspace import (
    BusinessWorkspace,
    MonthlyRefresh,
    WorkspaceOutcome,
    WorkspaceState,
    apply_refresh,
)

__all__ = [
    "Alert",
    "AlertType",
    "BusinessValidationError",
    "BusinessWorkspace",
    "CompanyService",
    "DashboardService",
    "DerivedMetrics",
    "MonthlyDataService",
    "MonthlyRefresh",
    "NetIncomeFormula",
    "Notification",
    "NotificationVariant",
    "Period",
    "RecordNotFoundError",
    "RecordStore",
    "SqlAlchemyRecordStore",
    "StoreError",
    "SubmissionResult",
    "TargetService",
    "UserService",
    "UserServiceError",
    "WorkspaceOutcome",
    "WorkspaceState",
    "apply_refresh",
    "compute_alerts",
    "compute_derived_metrics",
]

"""Routers package."""

from .auth import router as auth_router
from .companies import router as companies_router
from .dashboard import router as dashboard_router
from .monthly_data import router as monthly_data_router
from .targets import router as targets_router
from .workspace import router as workspace_router

__all__ = [
    "auth_router",
    "companies_router",
    "dashboard_router",
    "monthly_data_router",
    "targets_router",
    "workspace_router",
]

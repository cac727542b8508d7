"""Expose SQLAlchemy models for convenient imports."""

from .business_target import BusinessTarget
from .company import Company
from .monthly_business_data import MonthlyBusinessData
from .user import User

__all__ = [
    "BusinessTarget",
    "Company",
    "MonthlyBusinessData",
    "User",
]

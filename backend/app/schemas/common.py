"""Shared schema definitions."""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..services.notifications import NotificationVariant

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    """Standard shape for unpaginated listings."""

    items: Sequence[T]
    total: int = Field(..., ge=0)


class NotificationRead(BaseModel):
    """Message to show to the user after an operation."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    model_config = ConfigDict(from_attributes=True)

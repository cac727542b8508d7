"""User facing notifications produced by the business services."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class NotificationVariant(str, enum.Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """Message meant to be shown to the user as a toast."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @classmethod
    def success(cls, description: str) -> "Notification":
        return cls(title="Successo", description=description)

    @classmethod
    def warning(cls, description: str) -> "Notification":
        return cls(
            title="Attenzione",
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
        )

    @classmethod
    def error(cls, description: str) -> "Notification":
        return cls(
            title="Errore",
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
        )

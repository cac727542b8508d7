"""Column types shared by the business models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import CHAR, Numeric, TypeDecorator

CENT = Decimal("0.01")
# Largest value a Numeric(14, 2) column holds.
MAX_AMOUNT = Decimal("999999999999.99")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GUID(TypeDecorator):
    """UUID primary keys that read back as plain strings.

    PostgreSQL gets its native ``UUID`` type; every other engine stores the
    canonical 36-character text form.
    """

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        as_uuid = value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        if dialect.name == "postgresql":
            return as_uuid
        return str(as_uuid)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        return str(value)


class Money(TypeDecorator):
    """Currency amount stored with two decimals and returned as ``Decimal``."""

    impl = Numeric(14, 2)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)

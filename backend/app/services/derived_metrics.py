"""Derived financial figures, period handling and target alerts."""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..db_types import CENT, MAX_AMOUNT
from .notifications import Notification

LOGGER = logging.getLogger(__name__)

NET_INCOME_FORMULA_ENV = "NET_INCOME_FORMULA"
ZERO = Decimal("0")
MIN_YEAR = 1000
MAX_YEAR = 9999


class BusinessValidationError(ValueError):
    """Raised when user supplied data is missing or invalid."""


class NetIncomeFormula(str, enum.Enum):
    """Supported definitions of net income.

    ``TOTAL_COSTS`` subtracts total costs from revenue. ``OWNER_COMPENSATION``
    subtracts the owner's compensation from the margin. The two agree only
    when total costs equal direct costs plus owner compensation.
    """

    TOTAL_COSTS = "total_costs"
    OWNER_COMPENSATION = "owner_compensation"


DEFAULT_NET_INCOME_FORMULA = NetIncomeFormula.TOTAL_COSTS


def resolve_net_income_formula() -> NetIncomeFormula:
    raw = os.getenv(NET_INCOME_FORMULA_ENV)
    if not raw:
        return DEFAULT_NET_INCOME_FORMULA
    try:
        return NetIncomeFormula(raw.strip().lower())
    except ValueError:
        LOGGER.warning(
            "Invalid %s=%s; falling back to %s",
            NET_INCOME_FORMULA_ENV,
            raw,
            DEFAULT_NET_INCOME_FORMULA.value,
        )
        return DEFAULT_NET_INCOME_FORMULA


@dataclass(frozen=True)
class DerivedMetrics:
    margine: Decimal
    utile_netto: Decimal


@dataclass(frozen=True, order=True)
class Period:
    """A (year, month) pair; sorts chronologically."""

    year: int
    month: int

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def _to_decimal(value: Any) -> Decimal:
    return Decimal(str(value or 0))


def compute_derived_metrics(
    ricavi: Any,
    costi_diretti: Any,
    costi_totali: Any,
    compenso_imprenditore: Any,
    *,
    formula: Optional[NetIncomeFormula] = None,
) -> DerivedMetrics:
    """Return margin and net income for one month of figures.

    Negative inputs are accepted as they are; callers decide whether negative
    results deserve a warning.
    """

    formula = formula or resolve_net_income_formula()
    revenue = _to_decimal(ricavi)
    margin = revenue - _to_decimal(costi_diretti)
    if formula is NetIncomeFormula.OWNER_COMPENSATION:
        net_income = margin - _to_decimal(compenso_imprenditore)
    else:
        net_income = revenue - _to_decimal(costi_totali)
    return DerivedMetrics(margine=margin, utile_netto=net_income)


def coerce_amount(value: Any) -> Decimal:
    """Turn form input into a storable non-negative amount, 0 when unusable."""

    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
        return ZERO
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_period(month: Any, year: Any) -> Period:
    parsed_month = _parse_int(month)
    if parsed_month is None or not 1 <= parsed_month <= 12:
        raise BusinessValidationError("Seleziona un mese")
    parsed_year = _parse_int(year)
    if parsed_year is None or not MIN_YEAR <= parsed_year <= MAX_YEAR:
        raise BusinessValidationError("Seleziona un anno")
    return Period(year=parsed_year, month=parsed_month)


def advisory_notifications(metrics: DerivedMetrics) -> list[Notification]:
    notices = []
    if metrics.margine < 0:
        notices.append(
            Notification.warning("Il margine è negativo. Verifica i dati inseriti.")
        )
    if metrics.utile_netto < 0:
        notices.append(
            Notification.warning("L'utile netto è negativo. Verifica i costi totali.")
        )
    return notices


class AlertType(str, enum.Enum):
    MARGIN_BELOW_TARGET = "margin_below_target"
    NET_INCOME_BELOW_TARGET = "net_income_below_target"


@dataclass(frozen=True)
class Alert:
    type: AlertType
    message: str
    actual: Decimal
    target: Decimal
    level: str = "warning"


_ALERT_CHECKS = (
    (AlertType.MARGIN_BELOW_TARGET, "margine", "target_margine", "Margine sotto target del mese"),
    (
        AlertType.NET_INCOME_BELOW_TARGET,
        "utile_netto",
        "target_utile_netto",
        "Utile netto sotto target del mese",
    ),
)


def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def compute_alerts(current: Any, target: Any) -> list[Alert]:
    """Compare the latest month against the targets of its year.

    A threshold that was never set cannot raise an alert.
    """

    if current is None or target is None:
        return []

    alerts = []
    for alert_type, actual_field, target_field, message in _ALERT_CHECKS:
        threshold = _field(target, target_field)
        actual = _field(current, actual_field)
        if threshold is None or actual is None:
            continue
        actual_value = _to_decimal(actual)
        threshold_value = _to_decimal(threshold)
        if actual_value < threshold_value:
            alerts.append(
                Alert(
                    type=alert_type,
                    message=message,
                    actual=actual_value,
                    target=threshold_value,
                )
            )
    return alerts

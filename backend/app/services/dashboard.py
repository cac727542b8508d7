"""Dashboard projections combining monthly figures and targets."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from .. import models
from .derived_metrics import compute_alerts
from .monthly_data import MonthlyDataService
from .record_store import RecordStore
from .targets import TargetService

MONTH_LABELS = ("Gen", "Feb", "Mar", "Apr", "Mag", "Giu", "Lug", "Ago", "Set", "Ott", "Nov", "Dic")
ONE_DECIMAL = Decimal("0.1")
NEUTRAL_CHANGE_THRESHOLD = Decimal("0.1")
MARGIN_PERCENTAGE_TARGET = Decimal("60")

# (kpi key, title, record field, target field)
_CURRENCY_KPIS = (
    ("ricavi", "Ricavi", "ricavi", "target_ricavi"),
    ("margine", "Margine", "margine", "target_margine"),
    ("utile_netto", "Utile Netto", "utile_netto", "target_utile_netto"),
)


def _period_key(record: Optional[models.MonthlyBusinessData]) -> Optional[str]:
    if record is None:
        return None
    return f"{record.year:04d}-{record.month:02d}"


class DashboardService:
    """Builds the figures shown on the company dashboard."""

    @staticmethod
    def percent_change(value: Decimal, previous: Optional[Decimal]) -> Optional[Decimal]:
        if previous is None or previous == 0:
            return None
        change = (value - previous) / abs(previous) * 100
        return change.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)

    @staticmethod
    def trend_direction(change: Optional[Decimal]) -> Optional[str]:
        if change is None:
            return None
        if abs(change) < NEUTRAL_CHANGE_THRESHOLD:
            return "neutral"
        return "positive" if change > 0 else "negative"

    @staticmethod
    def margin_percentage(record: Optional[models.MonthlyBusinessData]) -> Optional[Decimal]:
        if record is None or not record.ricavi:
            return None
        ratio = Decimal(record.margine) / Decimal(record.ricavi) * 100
        return ratio.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)

    @staticmethod
    def _kpi(
        key: str,
        title: str,
        value: Optional[Decimal],
        previous: Optional[Decimal],
        target: Optional[Decimal],
        value_format: str,
    ) -> dict[str, Any]:
        change = DashboardService.percent_change(value, previous) if value is not None else None
        return {
            "key": key,
            "title": title,
            "format": value_format,
            "value": value,
            "previous_value": previous,
            "change_percentage": change,
            "trend": DashboardService.trend_direction(change),
            "target": target,
            "under_target": value is not None and target is not None and value < target,
        }

    @staticmethod
    def summary(store: RecordStore, company: models.Company) -> dict[str, Any]:
        records = MonthlyDataService.list_monthly_records(store, company.id)
        current = records[-1] if records else None
        previous = records[-2] if len(records) > 1 else None
        target = (
            TargetService.target_for_year(store, company.id, current.year)
            if current is not None
            else None
        )

        kpis = []
        targets_met = 0
        targets_total = 0
        for key, title, field_name, target_field in _CURRENCY_KPIS:
            value = getattr(current, field_name) if current is not None else None
            previous_value = getattr(previous, field_name) if previous is not None else None
            threshold = getattr(target, target_field) if target is not None else None
            kpis.append(DashboardService._kpi(key, title, value, previous_value, threshold, "currency"))
            if threshold is not None and value is not None:
                targets_total += 1
                if value >= threshold:
                    targets_met += 1

        kpis.append(
            DashboardService._kpi(
                "margine_percentuale",
                "Margine %",
                DashboardService.margin_percentage(current),
                DashboardService.margin_percentage(previous),
                MARGIN_PERCENTAGE_TARGET,
                "percentage",
            )
        )

        trend = [
            {
                "label": MONTH_LABELS[record.month - 1],
                "year": record.year,
                "month": record.month,
                "ricavi": record.ricavi,
                "margine": record.margine,
                "utile_netto": record.utile_netto,
            }
            for record in records
        ]

        return {
            "company_id": company.id,
            "company_name": company.name,
            "current_period": _period_key(current),
            "previous_period": _period_key(previous),
            "kpis": kpis,
            "alerts": compute_alerts(current, target),
            "targets_met": targets_met,
            "targets_total": targets_total,
            "trend": trend,
        }

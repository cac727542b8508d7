"""Business logic for the monthly figures of a company."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .. import models
from .derived_metrics import (
    BusinessValidationError,
    advisory_notifications,
    coerce_amount,
    compute_derived_metrics,
    normalize_period,
)
from .notifications import Notification
from .record_store import MONTHLY_BUSINESS_DATA, RecordNotFoundError, RecordStore

LOGGER = logging.getLogger(__name__)

AMOUNT_FIELDS = ("ricavi", "costi_diretti", "costi_totali", "compenso_imprenditore")
PERIOD_KEY_FIELDS = ("company_id", "year", "month")


@dataclass
class SubmissionResult:
    """Outcome of a period submission."""

    record: models.MonthlyBusinessData
    records: list[models.MonthlyBusinessData]
    notifications: list[Notification] = field(default_factory=list)


class MonthlyDataService:
    """Maintains monthly records and their derived margin and net income."""

    @staticmethod
    def list_monthly_records(store: RecordStore, company_id: str) -> list[models.MonthlyBusinessData]:
        return store.list_records(
            MONTHLY_BUSINESS_DATA,
            {"company_id": company_id},
            order_by=("year", "month"),
        )

    @staticmethod
    def get_monthly_record(store: RecordStore, record_id: str) -> Optional[models.MonthlyBusinessData]:
        return store.get_record(MONTHLY_BUSINESS_DATA, record_id)

    @staticmethod
    def submit_monthly_record(
        store: RecordStore,
        company_id: Optional[str],
        month: Any,
        year: Any,
        ricavi: Any = 0,
        costi_diretti: Any = 0,
        costi_totali: Any = 0,
        compenso_imprenditore: Any = 0,
    ) -> SubmissionResult:
        """Store the figures of a period, replacing any previous submission.

        The record is saved even when the derived values are negative; the
        returned notifications carry the warnings for the user.
        """

        if not company_id:
            raise BusinessValidationError("Seleziona un'azienda prima di salvare i dati")
        period = normalize_period(month, year)

        amounts = {
            "ricavi": coerce_amount(ricavi),
            "costi_diretti": coerce_amount(costi_diretti),
            "costi_totali": coerce_amount(costi_totali),
            "compenso_imprenditore": coerce_amount(compenso_imprenditore),
        }
        metrics = compute_derived_metrics(**amounts)
        notices = advisory_notifications(metrics)
        if notices:
            LOGGER.warning(
                "Negative figures submitted for company %s period %s", company_id, period.key
            )

        record = store.upsert_record(
            MONTHLY_BUSINESS_DATA,
            PERIOD_KEY_FIELDS,
            {
                "company_id": company_id,
                "year": period.year,
                "month": period.month,
                **amounts,
                "margine": metrics.margine,
                "utile_netto": metrics.utile_netto,
            },
        )
        LOGGER.info("Saved monthly data for company %s period %s", company_id, period.key)
        records = MonthlyDataService.list_monthly_records(store, company_id)
        return SubmissionResult(record=record, records=records, notifications=notices)

    @staticmethod
    def update_monthly_record(
        store: RecordStore,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> tuple[models.MonthlyBusinessData, list[models.MonthlyBusinessData]]:
        """Apply a partial update of the amounts and recompute the derived values.

        Margin and net income are always derived, so they are rejected here.
        """

        locked = sorted(set(changes) - set(AMOUNT_FIELDS))
        if locked:
            raise BusinessValidationError(f"Campi non modificabili: {', '.join(locked)}")

        record = store.get_record(MONTHLY_BUSINESS_DATA, record_id)
        if record is None:
            raise RecordNotFoundError(MONTHLY_BUSINESS_DATA, record_id)

        amounts = {
            name: coerce_amount(changes[name]) if name in changes else getattr(record, name)
            for name in AMOUNT_FIELDS
        }
        metrics = compute_derived_metrics(**amounts)
        updated = store.update_record(
            MONTHLY_BUSINESS_DATA,
            record_id,
            {**amounts, "margine": metrics.margine, "utile_netto": metrics.utile_netto},
        )
        return updated, MonthlyDataService.list_monthly_records(store, updated.company_id)

    @staticmethod
    def delete_monthly_record(
        store: RecordStore, record_id: str
    ) -> tuple[str, list[models.MonthlyBusinessData]]:
        """Remove a record; returns the owning company and its remaining records."""

        record = store.get_record(MONTHLY_BUSINESS_DATA, record_id)
        if record is None:
            raise RecordNotFoundError(MONTHLY_BUSINESS_DATA, record_id)
        company_id = record.company_id
        store.delete_record(MONTHLY_BUSINESS_DATA, record_id)
        LOGGER.info("Deleted monthly data %s of company %s", record_id, company_id)
        return company_id, MonthlyDataService.list_monthly_records(store, company_id)

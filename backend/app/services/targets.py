"""Business logic for yearly targets."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .. import models
from ..db_types import MAX_AMOUNT
from .derived_metrics import MAX_YEAR, MIN_YEAR, BusinessValidationError
from .record_store import BUSINESS_TARGETS, RecordStore

TARGET_FIELDS = ("target_ricavi", "target_margine", "target_utile_netto")


class TargetService:
    """Read and upsert the target set of a company for a year."""

    @staticmethod
    def list_targets(store: RecordStore, company_id: str) -> list[models.BusinessTarget]:
        return store.list_records(BUSINESS_TARGETS, {"company_id": company_id}, order_by=("-year",))

    @staticmethod
    def target_for_year(store: RecordStore, company_id: str, year: int) -> Optional[models.BusinessTarget]:
        matches = store.list_records(BUSINESS_TARGETS, {"company_id": company_id, "year": year})
        return matches[0] if matches else None

    @staticmethod
    def _threshold(name: str, value: Any) -> Optional[Decimal]:
        if value is None or value == "":
            return None
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise BusinessValidationError(f"Valore non valido per {name}") from exc
        if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
            raise BusinessValidationError(f"Valore non valido per {name}")
        return amount

    @staticmethod
    def save_targets(
        store: RecordStore,
        company_id: Optional[str],
        year: int,
        target_ricavi: Any = None,
        target_margine: Any = None,
        target_utile_netto: Any = None,
    ) -> models.BusinessTarget:
        if not company_id:
            raise BusinessValidationError("Seleziona un'azienda prima di salvare gli obiettivi")
        if not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
            raise BusinessValidationError("Seleziona un anno")
        raw_values = (target_ricavi, target_margine, target_utile_netto)
        thresholds = {
            name: TargetService._threshold(name, value)
            for name, value in zip(TARGET_FIELDS, raw_values)
        }
        return store.upsert_record(
            BUSINESS_TARGETS,
            ("company_id", "year"),
            {"company_id": company_id, "year": year, **thresholds},
        )

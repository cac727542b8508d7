"""Business logic for companies."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .. import models
from ..db_types import MAX_AMOUNT
from .derived_metrics import BusinessValidationError
from .record_store import COMPANIES, RecordNotFoundError, RecordStore

LOGGER = logging.getLogger(__name__)


class CompanyService:
    """Create, read and update companies owned by a user."""

    @staticmethod
    def list_companies(store: RecordStore, user_id: str) -> list[models.Company]:
        return store.list_records(COMPANIES, {"user_id": user_id}, order_by=("-created_at",))

    @staticmethod
    def get_company(store: RecordStore, user_id: str, company_id: str) -> Optional[models.Company]:
        company = store.get_record(COMPANIES, company_id)
        if company is None or company.user_id != user_id:
            return None
        return company

    @staticmethod
    def _clean_fields(name: Optional[str], description: Optional[str], capitale_sociale: Any) -> dict:
        cleaned_name = (name or "").strip()
        if not cleaned_name:
            raise BusinessValidationError("Il nome dell'azienda è obbligatorio")
        cleaned_description = (description or "").strip() or None
        try:
            capital = Decimal(str(capitale_sociale if capitale_sociale is not None else 0))
        except InvalidOperation as exc:
            raise BusinessValidationError("Capitale sociale non valido") from exc
        if not capital.is_finite() or capital < 0:
            raise BusinessValidationError("Il capitale sociale non può essere negativo")
        if capital > MAX_AMOUNT:
            raise BusinessValidationError("Capitale sociale non valido")
        return {
            "name": cleaned_name,
            "description": cleaned_description,
            "capitale_sociale": capital,
        }

    @staticmethod
    def create_company(
        store: RecordStore,
        user_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        capitale_sociale: Any = 0,
    ) -> models.Company:
        fields = CompanyService._clean_fields(name, description, capitale_sociale)
        company = store.insert_record(COMPANIES, {**fields, "user_id": user_id})
        LOGGER.info("Created company %s for user %s", company.id, user_id)
        return company

    @staticmethod
    def update_company(
        store: RecordStore,
        user_id: str,
        company_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        capitale_sociale: Any = 0,
    ) -> models.Company:
        fields = CompanyService._clean_fields(name, description, capitale_sociale)
        if CompanyService.get_company(store, user_id, company_id) is None:
            raise RecordNotFoundError(COMPANIES, company_id)
        return store.update_record(COMPANIES, company_id, fields)

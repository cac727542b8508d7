"""Translation of service errors into HTTP responses."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from .. import models
from ..services import (
    BusinessValidationError,
    CompanyService,
    RecordNotFoundError,
    RecordStore,
    StoreError,
)

LOGGER = logging.getLogger(__name__)

COMPANY_NOT_FOUND = "Azienda non trovata"
RECORD_NOT_FOUND = "Dati mensili non trovati"


@contextmanager
def service_errors(failure_message: str, not_found: str = COMPANY_NOT_FOUND) -> Iterator[None]:
    """Map validation, lookup and persistence failures to HTTP errors."""

    try:
        yield
    except BusinessValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RecordNotFoundError as exc:
        LOGGER.info("Lookup failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found) from exc
    except StoreError as exc:
        LOGGER.exception("Record store failure", exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure_message,
        ) from exc


def require_company(store: RecordStore, user_id: str, company_id: str) -> models.Company:
    """Return the company when it belongs to ``user_id``; 404 otherwise."""

    with service_errors("Impossibile caricare l'azienda"):
        company = CompanyService.get_company(store, user_id, company_id)
    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=COMPANY_NOT_FOUND)
    return company

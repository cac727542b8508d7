"""Router exposing the monthly figures of a company."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db
from ..security import UserIdentity, get_current_user
from ..services import CompanyService, MonthlyDataService, RecordStore, SqlAlchemyRecordStore
from .errors import RECORD_NOT_FOUND, require_company, service_errors

router = APIRouter(tags=["monthly-data"])


def _require_record(store: RecordStore, user_id: str, record_id: str) -> models.MonthlyBusinessData:
    with service_errors("Impossibile caricare i dati mensili", not_found=RECORD_NOT_FOUND):
        record = MonthlyDataService.get_monthly_record(store, record_id)
        owner = (
            CompanyService.get_company(store, user_id, record.company_id)
            if record is not None
            else None
        )
    if record is None or owner is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=RECORD_NOT_FOUND)
    return record


@router.get("/companies/{company_id}/monthly-data", response_model=schemas.MonthlyDataListResponse)
def list_monthly_data(
    company_id: str,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.MonthlyDataListResponse:
    """Return the monthly records of a company in chronological order."""

    store = SqlAlchemyRecordStore(db)
    company = require_company(store, current_user.id, company_id)
    with service_errors("Impossibile caricare i dati mensili"):
        items = MonthlyDataService.list_monthly_records(store, company.id)
    return schemas.MonthlyDataListResponse(items=items, total=len(items))


@router.post(
    "/companies/{company_id}/monthly-data",
    response_model=schemas.MonthlyDataSubmitResponse,
)
def submit_monthly_data(
    company_id: str,
    payload: schemas.MonthlyDataSubmit,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.MonthlyDataSubmitResponse:
    """Store the figures of a period, replacing an earlier submission."""

    store = SqlAlchemyRecordStore(db)
    company = require_company(store, current_user.id, company_id)
    with service_errors("Impossibile salvare i dati"):
        result = MonthlyDataService.submit_monthly_record(
            store,
            company.id,
            payload.month,
            payload.year,
            ricavi=payload.ricavi,
            costi_diretti=payload.costi_diretti,
            costi_totali=payload.costi_totali,
            compenso_imprenditore=payload.compenso_imprenditore,
        )
    return schemas.MonthlyDataSubmitResponse(
        record=result.record,
        items=result.records,
        notifications=result.notifications,
    )


@router.patch("/monthly-data/{record_id}", response_model=schemas.MonthlyDataRead)
def update_monthly_data(
    record_id: str,
    payload: schemas.MonthlyDataUpdate,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.MonthlyDataRead:
    store = SqlAlchemyRecordStore(db)
    record = _require_record(store, current_user.id, record_id)
    with service_errors("Impossibile aggiornare i dati", not_found=RECORD_NOT_FOUND):
        updated, _ = MonthlyDataService.update_monthly_record(
            store, record.id, payload.model_dump(exclude_none=True)
        )
    return updated


@router.delete("/monthly-data/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_monthly_data(
    record_id: str,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    store = SqlAlchemyRecordStore(db)
    record = _require_record(store, current_user.id, record_id)
    with service_errors("Impossibile eliminare i dati", not_found=RECORD_NOT_FOUND):
        MonthlyDataService.delete_monthly_record(store, record.id)

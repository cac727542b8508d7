"""Router exposing the yearly targets of a company."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import UserIdentity, get_current_user
from ..services import SqlAlchemyRecordStore, TargetService
from .errors import require_company, service_errors

router = APIRouter(tags=["targets"])


@router.get("/companies/{company_id}/targets", response_model=schemas.TargetListResponse)
def list_targets(
    company_id: str,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.TargetListResponse:
    """Return the target sets of a company, most recent year first."""

    store = SqlAlchemyRecordStore(db)
    company = require_company(store, current_user.id, company_id)
    with service_errors("Impossibile caricare gli obiettivi"):
        items = TargetService.list_targets(store, company.id)
    return schemas.TargetListResponse(items=items, total=len(items))


@router.put("/companies/{company_id}/targets/{year}", response_model=schemas.TargetRead)
def save_targets(
    company_id: str,
    payload: schemas.TargetUpsert,
    year: int = Path(..., ge=1000, le=9999),
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.TargetRead:
    """Create or replace the targets of ``year``; omitted thresholds are cleared."""

    store = SqlAlchemyRecordStore(db)
    company = require_company(store, current_user.id, company_id)
    with service_errors("Impossibile salvare gli obiettivi"):
        return TargetService.save_targets(
            store,
            company.id,
            year,
            target_ricavi=payload.target_ricavi,
            target_margine=payload.target_margine,
            target_utile_netto=payload.target_utile_netto,
        )

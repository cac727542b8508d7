"""Router exposing the company dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import UserIdentity, get_current_user
from ..services import DashboardService, SqlAlchemyRecordStore
from .errors import require_company, service_errors

router = APIRouter(tags=["dashboard"])


@router.get("/companies/{company_id}/dashboard", response_model=schemas.DashboardResponse)
def read_dashboard(
    company_id: str,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.DashboardResponse:
    """Return KPIs, alerts and the monthly trend of a company."""

    store = SqlAlchemyRecordStore(db)
    company = require_company(store, current_user.id, company_id)
    with service_errors("Impossibile caricare la dashboard"):
        summary = DashboardService.summary(store, company)
    return schemas.DashboardResponse(**summary)

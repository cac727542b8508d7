"""Router containing create, read and update operations for companies."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import UserIdentity, get_current_user
from ..services import CompanyService, SqlAlchemyRecordStore
from .errors import require_company, service_errors

router = APIRouter()


@router.get("", response_model=schemas.CompanyListResponse)
def list_companies(
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.CompanyListResponse:
    """Return the companies of the current user, newest first."""

    with service_errors("Impossibile caricare le aziende"):
        items = CompanyService.list_companies(SqlAlchemyRecordStore(db), current_user.id)
    return schemas.CompanyListResponse(items=items, total=len(items))


@router.post("", response_model=schemas.CompanyRead, status_code=status.HTTP_201_CREATED)
def create_company(
    company_in: schemas.CompanyCreate,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.CompanyRead:
    with service_errors("Impossibile creare l'azienda"):
        return CompanyService.create_company(
            SqlAlchemyRecordStore(db),
            current_user.id,
            company_in.name,
            company_in.description,
            company_in.capitale_sociale,
        )


@router.get("/{company_id}", response_model=schemas.CompanyRead)
def get_company(
    company_id: str,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.CompanyRead:
    return require_company(SqlAlchemyRecordStore(db), current_user.id, company_id)


@router.put("/{company_id}", response_model=schemas.CompanyRead)
def update_company(
    company_id: str,
    company_in: schemas.CompanyUpdate,
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.CompanyRead:
    """Replace the editable fields of a company."""

    with service_errors("Impossibile aggiornare l'azienda"):
        return CompanyService.update_company(
            SqlAlchemyRecordStore(db),
            current_user.id,
            company_id,
            company_in.name,
            company_in.description,
            company_in.capitale_sociale,
        )

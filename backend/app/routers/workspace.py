"""Router driving the workspace commands of the current user.

Every endpoint loads the workspace of the user, applies one command and
answers with the resulting snapshot. Failed commands still answer 200 with
``ok`` set to false and the notifications explaining why.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import UserIdentity, get_current_user
from ..services import (
    BusinessWorkspace,
    SqlAlchemyRecordStore,
    UserService,
    WorkspaceOutcome,
)

router = APIRouter(tags=["workspace"])


class _WorkspaceRequest:
    def __init__(self, db: Session, user_id: str) -> None:
        self.db = db
        self.user = UserService.get_user(db, user_id)
        self.workspace = BusinessWorkspace(SqlAlchemyRecordStore(db))
        self.loaded = self.workspace.load(user_id, self.user.selected_company_id)

    def respond(self, outcome: WorkspaceOutcome) -> schemas.WorkspaceResponse:
        state = outcome.state
        if outcome.ok and state.selected_company_id != self.user.selected_company_id:
            UserService.remember_selection(self.db, self.user.id, state.selected_company_id)
        return schemas.WorkspaceResponse(
            ok=outcome.ok,
            notifications=list(outcome.notifications),
            companies=list(state.companies),
            selected_company=state.selected_company,
            monthly_data=list(state.monthly_records),
            targets=list(state.targets),
            alerts=BusinessWorkspace.alerts(state),
        )

    def run(self, command) -> schemas.WorkspaceResponse:
        if not self.loaded.ok:
            return self.respond(self.loaded)
        return self.respond(command(self.workspace, self.loaded.state))


def _open_workspace(
    current_user: UserIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> _WorkspaceRequest:
    return _WorkspaceRequest(db, current_user.id)


@router.get("", response_model=schemas.WorkspaceResponse)
def read_workspace(current: _WorkspaceRequest = Depends(_open_workspace)) -> schemas.WorkspaceResponse:
    """Return the companies of the user and the data of the selected one."""

    return current.respond(current.loaded)


@router.put("/selection", response_model=schemas.WorkspaceResponse)
def select_company(
    payload: schemas.WorkspaceSelection,
    current: _WorkspaceRequest = Depends(_open_workspace),
) -> schemas.WorkspaceResponse:
    return current.run(lambda workspace, state: workspace.select_company(state, payload.company_id))


@router.post("/companies", response_model=schemas.WorkspaceResponse)
def create_company(
    payload: schemas.WorkspaceCompanyInput,
    current: _WorkspaceRequest = Depends(_open_workspace),
) -> schemas.WorkspaceResponse:
    """Create a company and make it the selected one."""

    return current.run(
        lambda workspace, state: workspace.create_company(
            state, payload.name, payload.description, payload.capitale_sociale
        )
    )


@router.put("/companies/{company_id}", response_model=schemas.WorkspaceResponse)
def update_company(
    company_id: str,
    payload: schemas.WorkspaceCompanyInput,
    current: _WorkspaceRequest = Depends(_open_workspace),
) -> schemas.WorkspaceResponse:
    return current.run(
        lambda workspace, state: workspace.update_company(
            state, company_id, payload.name, payload.description, payload.capitale_sociale
        )
    )


@router.post("/monthly-data", response_model=schemas.WorkspaceResponse)
def submit_monthly_data(
    payload: schemas.WorkspaceMonthlyInput,
    current: _WorkspaceRequest = Depends(_open_workspace),
) -> schemas.WorkspaceResponse:
    """Save the figures of a period for the selected company."""

    return current.run(
        lambda workspace, state: workspace.submit_monthly_record(
            state,
            payload.month,
            payload.year,
            ricavi=payload.ricavi,
            costi_diretti=payload.costi_diretti,
            costi_totali=payload.costi_totali,
            compenso_imprenditore=payload.compenso_imprenditore,
        )
    )


@router.patch("/monthly-data/{record_id}", response_model=schemas.WorkspaceResponse)
def update_monthly_data(
    record_id: str,
    payload: schemas.WorkspaceMonthlyChanges,
    current: _WorkspaceRequest = Depends(_open_workspace),
) -> schemas.WorkspaceResponse:
    return current.run(
        lambda workspace, state: workspace.update_monthly_record(state, record_id, payload.changes())
    )


@router.delete("/monthly-data/{record_id}", response_model=schemas.WorkspaceResponse)
def delete_monthly_data(
    record_id: str,
    current: _WorkspaceRequest = Depends(_open_workspace),
) -> schemas.WorkspaceResponse:
    return current.run(
        lambda workspace, state: workspace.delete_monthly_record(state, record_id)
    )


@router.put("/targets", response_model=schemas.WorkspaceResponse)
def save_targets(
    payload: schemas.WorkspaceTargetsInput,
    current: _WorkspaceRequest = Depends(_open_workspace),
) -> schemas.WorkspaceResponse:
    """Save the targets of a year for the selected company."""

    return current.run(
        lambda workspace, state: workspace.save_targets(
            state,
            payload.year,
            target_ricavi=payload.target_ricavi,
            target_margine=payload.target_margine,
            target_utile_netto=payload.target_utile_netto,
        )
    )

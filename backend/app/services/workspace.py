"""Workspace state and commands driven by the presentation layer.

A ``WorkspaceState`` is never mutated. Every command of ``BusinessWorkspace``
returns a ``WorkspaceOutcome`` with the next state and the notifications to
show. Failures never escape a command: they become destructive notifications
and the previous state is returned unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional

from .. import models
from .companies import CompanyService
from .derived_metrics import Alert, BusinessValidationError, compute_alerts
from .monthly_data import MonthlyDataService
from .notifications import Notification
from .record_store import MONTHLY_BUSINESS_DATA, RecordNotFoundError, RecordStore
from .targets import TargetService

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceState:
    user_id: str
    companies: tuple[models.Company, ...] = ()
    selected_company: Optional[models.Company] = None
    monthly_records: tuple[models.MonthlyBusinessData, ...] = ()
    targets: tuple[models.BusinessTarget, ...] = ()

    @property
    def selected_company_id(self) -> Optional[str]:
        return self.selected_company.id if self.selected_company is not None else None


@dataclass(frozen=True)
class MonthlyRefresh:
    """Freshly loaded monthly records, keyed by the company they belong to."""

    company_id: str
    records: tuple[models.MonthlyBusinessData, ...]


@dataclass(frozen=True)
class TargetRefresh:
    company_id: str
    targets: tuple[models.BusinessTarget, ...]


@dataclass(frozen=True)
class WorkspaceOutcome:
    state: WorkspaceState
    notifications: tuple[Notification, ...] = ()
    ok: bool = True


def apply_refresh(state: WorkspaceState, refresh: MonthlyRefresh) -> WorkspaceState:
    """Install reloaded records unless the selection moved on meanwhile."""

    if refresh.company_id != state.selected_company_id:
        LOGGER.debug(
            "Discarding monthly data of company %s; company %s is selected",
            refresh.company_id,
            state.selected_company_id,
        )
        return state
    return replace(state, monthly_records=tuple(refresh.records))


def apply_target_refresh(state: WorkspaceState, refresh: TargetRefresh) -> WorkspaceState:
    if refresh.company_id != state.selected_company_id:
        return state
    return replace(state, targets=tuple(refresh.targets))


class BusinessWorkspace:
    """Boundary between the presentation layer and the business services."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def _run(
        self,
        state: WorkspaceState,
        failure_message: str,
        action: Callable[[], WorkspaceOutcome],
    ) -> WorkspaceOutcome:
        try:
            return action()
        except BusinessValidationError as exc:
            return WorkspaceOutcome(state, (Notification.error(str(exc)),), ok=False)
        except Exception:
            LOGGER.exception(failure_message)
            return WorkspaceOutcome(state, (Notification.error(failure_message),), ok=False)

    def _load_monthly(self, company_id: str) -> MonthlyRefresh:
        records = MonthlyDataService.list_monthly_records(self.store, company_id)
        return MonthlyRefresh(company_id=company_id, records=tuple(records))

    def _load_targets(self, company_id: str) -> TargetRefresh:
        targets = TargetService.list_targets(self.store, company_id)
        return TargetRefresh(company_id=company_id, targets=tuple(targets))

    def _with_selection(
        self,
        state: WorkspaceState,
        companies: tuple[models.Company, ...],
        selected: Optional[models.Company],
    ) -> WorkspaceState:
        state = replace(
            state,
            companies=companies,
            selected_company=selected,
            monthly_records=(),
            targets=(),
        )
        if selected is None:
            return state
        state = apply_refresh(state, self._load_monthly(selected.id))
        return apply_target_refresh(state, self._load_targets(selected.id))

    def _owned_record(self, state: WorkspaceState, record_id: str) -> models.MonthlyBusinessData:
        record = MonthlyDataService.get_monthly_record(self.store, record_id)
        owned_ids = {company.id for company in state.companies}
        if record is None or record.company_id not in owned_ids:
            raise RecordNotFoundError(MONTHLY_BUSINESS_DATA, record_id)
        return record

    def load(self, user_id: str, selected_company_id: Optional[str] = None) -> WorkspaceOutcome:
        """Load the companies of a user, keeping or defaulting the selection."""

        empty = WorkspaceState(user_id=user_id)

        def action() -> WorkspaceOutcome:
            companies = tuple(CompanyService.list_companies(self.store, user_id))
            selected = next(
                (company for company in companies if company.id == selected_company_id),
                companies[0] if companies else None,
            )
            return WorkspaceOutcome(self._with_selection(empty, companies, selected))

        return self._run(empty, "Impossibile caricare le aziende", action)

    def select_company(self, state: WorkspaceState, company_id: str) -> WorkspaceOutcome:
        def action() -> WorkspaceOutcome:
            selected = next(
                (company for company in state.companies if company.id == company_id), None
            )
            if selected is None:
                raise BusinessValidationError("Azienda non trovata")
            return WorkspaceOutcome(self._with_selection(state, state.companies, selected))

        return self._run(state, "Impossibile caricare i dati mensili", action)

    def create_company(
        self,
        state: WorkspaceState,
        name: Optional[str],
        description: Optional[str] = None,
        capitale_sociale: Any = 0,
    ) -> WorkspaceOutcome:
        def action() -> WorkspaceOutcome:
            company = CompanyService.create_company(
                self.store, state.user_id, name, description, capitale_sociale
            )
            companies = tuple(CompanyService.list_companies(self.store, state.user_id))
            return WorkspaceOutcome(
                self._with_selection(state, companies, company),
                (Notification.success("Azienda creata con successo"),),
            )

        return self._run(state, "Impossibile creare l'azienda", action)

    def update_company(
        self,
        state: WorkspaceState,
        company_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        capitale_sociale: Any = 0,
    ) -> WorkspaceOutcome:
        def action() -> WorkspaceOutcome:
            company = CompanyService.update_company(
                self.store, state.user_id, company_id, name, description, capitale_sociale
            )
            companies = tuple(CompanyService.list_companies(self.store, state.user_id))
            return WorkspaceOutcome(
                self._with_selection(state, companies, company),
                (Notification.success("Azienda aggiornata con successo"),),
            )

        return self._run(state, "Impossibile aggiornare l'azienda", action)

    def submit_monthly_record(
        self,
        state: WorkspaceState,
        month: Any,
        year: Any,
        ricavi: Any = 0,
        costi_diretti: Any = 0,
        costi_totali: Any = 0,
        compenso_imprenditore: Any = 0,
    ) -> WorkspaceOutcome:
        def action() -> WorkspaceOutcome:
            company_id = state.selected_company_id
            result = MonthlyDataService.submit_monthly_record(
                self.store,
                company_id,
                month,
                year,
                ricavi=ricavi,
                costi_diretti=costi_diretti,
                costi_totali=costi_totali,
                compenso_imprenditore=compenso_imprenditore,
            )
            refreshed = apply_refresh(state, MonthlyRefresh(company_id, tuple(result.records)))
            notices = (*result.notifications, Notification.success("Dati salvati con successo"))
            return WorkspaceOutcome(refreshed, notices)

        return self._run(state, "Impossibile salvare i dati", action)

    def update_monthly_record(
        self,
        state: WorkspaceState,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> WorkspaceOutcome:
        def action() -> WorkspaceOutcome:
            self._owned_record(state, record_id)
            updated, records = MonthlyDataService.update_monthly_record(
                self.store, record_id, changes
            )
            refreshed = apply_refresh(state, MonthlyRefresh(updated.company_id, tuple(records)))
            return WorkspaceOutcome(refreshed, (Notification.success("Dati aggiornati con successo"),))

        return self._run(state, "Impossibile aggiornare i dati", action)

    def delete_monthly_record(self, state: WorkspaceState, record_id: str) -> WorkspaceOutcome:
        def action() -> WorkspaceOutcome:
            self._owned_record(state, record_id)
            company_id, records = MonthlyDataService.delete_monthly_record(self.store, record_id)
            refreshed = apply_refresh(state, MonthlyRefresh(company_id, tuple(records)))
            return WorkspaceOutcome(refreshed, (Notification.success("Dati eliminati con successo"),))

        return self._run(state, "Impossibile eliminare i dati", action)

    def save_targets(
        self,
        state: WorkspaceState,
        year: int,
        target_ricavi: Any = None,
        target_margine: Any = None,
        target_utile_netto: Any = None,
    ) -> WorkspaceOutcome:
        def action() -> WorkspaceOutcome:
            company_id = state.selected_company_id
            TargetService.save_targets(
                self.store,
                company_id,
                year,
                target_ricavi=target_ricavi,
                target_margine=target_margine,
                target_utile_netto=target_utile_netto,
            )
            refreshed = apply_target_refresh(state, self._load_targets(company_id))
            return WorkspaceOutcome(refreshed, (Notification.success("Obiettivi salvati con successo"),))

        return self._run(state, "Impossibile salvare gli obiettivi", action)

    @staticmethod
    def alerts(state: WorkspaceState) -> list[Alert]:
        """Alerts for the most recent month of the selected company."""

        if not state.monthly_records:
            return []
        current = state.monthly_records[-1]
        target = next((item for item in state.targets if item.year == current.year), None)
        return compute_alerts(current, target)

from __future__ import annotations

from decimal import Decimal

import pytest

from backend.app.services import (
    BusinessWorkspace,
    MonthlyRefresh,
    SqlAlchemyRecordStore,
    StoreError,
    UserService,
    apply_refresh,
)
from backend.app.services.notifications import NotificationVariant


class SpyStore(SqlAlchemyRecordStore):
    """Record store counting writes and optionally failing them."""

    def __init__(self, db, fail_writes: bool = False) -> None:
        super().__init__(db)
        self.fail_writes = fail_writes
        self.writes = []

    def _write(self, action: str, collection: str) -> None:
        self.writes.append((action, collection))
        if self.fail_writes:
            raise StoreError(f"Unable to {action} {collection}")

    def insert_record(self, collection, fields):
        self._write("insert", collection)
        return super().insert_record(collection, fields)

    def upsert_record(self, collection, key_fields, fields):
        self._write("upsert", collection)
        return super().upsert_record(collection, key_fields, fields)

    def update_record(self, collection, record_id, fields):
        self._write("update", collection)
        return super().update_record(collection, record_id, fields)

    def delete_record(self, collection, record_id):
        self._write("delete", collection)
        return super().delete_record(collection, record_id)


@pytest.fixture
def spy_store(db_session) -> SpyStore:
    return SpyStore(db_session)


@pytest.fixture
def workspace(spy_store) -> BusinessWorkspace:
    return BusinessWorkspace(spy_store)


def test_load_selects_the_first_company(workspace, owner, make_company) -> None:
    make_company("Prima Srl")
    newest = make_company("Seconda Srl")

    outcome = workspace.load(owner.id)

    assert outcome.ok
    assert [company.name for company in outcome.state.companies] == ["Seconda Srl", "Prima Srl"]
    assert outcome.state.selected_company_id == newest.id


def test_load_keeps_a_valid_selection(workspace, owner, make_company) -> None:
    first = make_company("Prima Srl")
    make_company("Seconda Srl")

    outcome = workspace.load(owner.id, first.id)

    assert outcome.state.selected_company_id == first.id


def test_create_company_with_blank_name_is_a_no_op(workspace, spy_store, owner) -> None:
    state = workspace.load(owner.id).state

    outcome = workspace.create_company(state, "", "desc")

    assert outcome.ok is False
    assert outcome.state is state
    assert outcome.state.selected_company is None
    assert spy_store.writes == []
    assert outcome.notifications[0].variant is NotificationVariant.DESTRUCTIVE


def test_create_company_selects_it(workspace, owner, make_company) -> None:
    make_company("Esistente Srl")
    state = workspace.load(owner.id).state

    outcome = workspace.create_company(state, "Acme Srl")

    assert outcome.ok
    assert outcome.state.selected_company.name == "Acme Srl"
    assert {company.name for company in outcome.state.companies} == {"Esistente Srl", "Acme Srl"}
    assert outcome.notifications[0].description == "Azienda creata con successo"


def test_submit_without_selection_fails_validation(workspace, spy_store, owner) -> None:
    state = workspace.load(owner.id).state

    outcome = workspace.submit_monthly_record(state, 1, 2024, ricavi=100)

    assert outcome.ok is False
    assert outcome.state is state
    assert spy_store.writes == []
    assert "Seleziona un'azienda" in outcome.notifications[0].description


def test_submit_refreshes_the_selected_company(workspace, owner, make_company) -> None:
    make_company()
    state = workspace.load(owner.id).state

    outcome = workspace.submit_monthly_record(
        state, "4", "2024", ricavi="1000", costi_diretti="1500", costi_totali="1600"
    )

    assert outcome.ok
    assert len(outcome.state.monthly_records) == 1
    assert outcome.state.monthly_records[0].margine == Decimal("-500.00")
    descriptions = [notice.description for notice in outcome.notifications]
    assert descriptions[-1] == "Dati salvati con successo"
    assert len(descriptions) == 3


def test_submit_stores_out_of_range_amounts_as_zero(workspace, owner, make_company) -> None:
    make_company()
    state = workspace.load(owner.id).state

    outcome = workspace.submit_monthly_record(state, "4", "2024", ricavi="1e30", costi_totali="10")

    assert outcome.ok
    assert outcome.state.monthly_records[0].ricavi == Decimal("0.00")


def test_store_failure_leaves_state_unchanged(db_session, owner, make_company) -> None:
    make_company()
    store = SpyStore(db_session)
    workspace = BusinessWorkspace(store)
    state = workspace.load(owner.id).state
    store.fail_writes = True

    outcome = workspace.submit_monthly_record(state, 1, 2024, ricavi=100)

    assert outcome.ok is False
    assert outcome.state is state
    assert outcome.notifications[0].description == "Impossibile salvare i dati"
    assert outcome.notifications[0].variant is NotificationVariant.DESTRUCTIVE


def test_stale_refresh_is_discarded(workspace, owner, make_company) -> None:
    company_a = make_company("Alfa Srl")
    company_b = make_company("Beta Srl")
    state = workspace.load(owner.id, company_a.id).state
    workspace.submit_monthly_record(state, 1, 2024, ricavi=100)
    stale = MonthlyRefresh(company_a.id, workspace.load(owner.id, company_a.id).state.monthly_records)

    state_b = workspace.select_company(state, company_b.id).state
    assert state_b.selected_company_id == company_b.id

    assert apply_refresh(state_b, stale) is state_b
    assert state_b.monthly_records == ()


def test_refresh_for_selected_company_is_applied(workspace, owner, make_company) -> None:
    company = make_company()
    state = workspace.load(owner.id).state
    submitted = workspace.submit_monthly_record(state, 1, 2024, ricavi=100).state

    refreshed = apply_refresh(state, MonthlyRefresh(company.id, submitted.monthly_records))

    assert refreshed.monthly_records == submitted.monthly_records


def test_select_unknown_company(workspace, owner) -> None:
    state = workspace.load(owner.id).state

    outcome = workspace.select_company(state, "not-a-company")

    assert outcome.ok is False
    assert outcome.notifications[0].description == "Azienda non trovata"


def test_update_and_delete_monthly_record(workspace, owner, make_company) -> None:
    make_company()
    state = workspace.load(owner.id).state
    state = workspace.submit_monthly_record(state, 1, 2024, ricavi=100).state
    record_id = state.monthly_records[0].id

    updated = workspace.update_monthly_record(state, record_id, {"ricavi": 300})
    assert updated.ok
    assert updated.state.monthly_records[0].ricavi == Decimal("300.00")

    deleted = workspace.delete_monthly_record(updated.state, record_id)
    assert deleted.ok
    assert deleted.state.monthly_records == ()


def test_records_of_other_users_cannot_be_edited(workspace, db_session, owner, make_company) -> None:
    intruder = UserService.register(db_session, "intruso@example.com", "Password1")
    make_company()
    owner_state = workspace.load(owner.id).state
    owner_state = workspace.submit_monthly_record(owner_state, 1, 2024, ricavi=100).state
    record_id = owner_state.monthly_records[0].id

    intruder_state = workspace.load(intruder.id).state
    outcome = workspace.delete_monthly_record(intruder_state, record_id)

    assert outcome.ok is False
    assert outcome.notifications[0].description == "Impossibile eliminare i dati"
    assert len(workspace.load(owner.id).state.monthly_records) == 1


def test_alerts_follow_targets_of_the_current_year(workspace, owner, make_company) -> None:
    make_company()
    state = workspace.load(owner.id).state
    state = workspace.submit_monthly_record(
        state, 6, 2024, ricavi=40000, costi_diretti=15000, costi_totali=30000
    ).state
    assert BusinessWorkspace.alerts(state) == []

    state = workspace.save_targets(state, 2024, target_margine=30000).state
    alerts = BusinessWorkspace.alerts(state)

    assert [alert.message for alert in alerts] == ["Margine sotto target del mese"]
    assert alerts[0].actual == Decimal("25000.00")

    state = workspace.save_targets(state, 2024, target_margine=20000).state
    assert BusinessWorkspace.alerts(state) == []

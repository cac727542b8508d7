from __future__ import annotations

from decimal import Decimal

import pytest

from backend.app import models
from backend.app.services import MonthlyDataService, RecordNotFoundError
from backend.app.services.derived_metrics import BusinessValidationError


def _submit(store, company_id, month, year, **amounts):
    return MonthlyDataService.submit_monthly_record(store, company_id, month, year, **amounts)


def test_submit_computes_derived_values(store, make_company) -> None:
    company = make_company()

    result = _submit(
        store,
        company.id,
        1,
        2024,
        ricavi="10000",
        costi_diretti="4000",
        costi_totali="7000",
        compenso_imprenditore="1500",
    )

    assert result.record.margine == Decimal("6000.00")
    assert result.record.utile_netto == Decimal("3000.00")
    assert result.notifications == []
    assert [record.id for record in result.records] == [result.record.id]


def test_resubmitting_a_period_replaces_the_record(store, db_session, make_company) -> None:
    company = make_company()

    first = _submit(store, company.id, 3, 2024, ricavi=1000, costi_diretti=200)
    second = _submit(store, company.id, "3", "2024", ricavi=1500, costi_diretti=300)

    assert second.record.id == first.record.id
    stored = db_session.query(models.MonthlyBusinessData).filter_by(company_id=company.id).all()
    assert len(stored) == 1
    assert stored[0].ricavi == Decimal("1500.00")
    assert stored[0].margine == Decimal("1200.00")


def test_records_are_listed_chronologically(store, make_company) -> None:
    company = make_company()
    for month, year in ((3, 2024), (12, 2023), (1, 2024)):
        _submit(store, company.id, month, year, ricavi=100)

    records = MonthlyDataService.list_monthly_records(store, company.id)

    assert [(record.year, record.month) for record in records] == [
        (2023, 12),
        (2024, 1),
        (2024, 3),
    ]


def test_invalid_amounts_are_stored_as_zero(store, make_company) -> None:
    company = make_company()

    result = _submit(store, company.id, 5, 2024, ricavi="abc", costi_diretti=-20)

    assert result.record.ricavi == Decimal("0.00")
    assert result.record.costi_diretti == Decimal("0.00")


def test_negative_results_are_saved_with_warnings(store, make_company) -> None:
    company = make_company()

    result = _submit(store, company.id, 6, 2024, ricavi=1000, costi_diretti=1500, costi_totali=2000)

    assert result.record.margine == Decimal("-500.00")
    assert result.record.utile_netto == Decimal("-1000.00")
    assert [notice.title for notice in result.notifications] == ["Attenzione", "Attenzione"]


def test_submit_requires_a_company(store) -> None:
    with pytest.raises(BusinessValidationError, match="Seleziona un'azienda"):
        _submit(store, None, 1, 2024, ricavi=100)


def test_submit_requires_month(store, make_company) -> None:
    company = make_company()

    with pytest.raises(BusinessValidationError, match="Seleziona un mese"):
        _submit(store, company.id, None, 2024, ricavi=100)
    assert MonthlyDataService.list_monthly_records(store, company.id) == []


def test_update_recomputes_derived_values(store, make_company) -> None:
    company = make_company()
    created = _submit(
        store, company.id, 1, 2024, ricavi=10000, costi_diretti=4000, costi_totali=7000
    ).record

    updated, records = MonthlyDataService.update_monthly_record(
        store, created.id, {"ricavi": "12000"}
    )

    assert updated.ricavi == Decimal("12000.00")
    assert updated.margine == Decimal("8000.00")
    assert updated.utile_netto == Decimal("5000.00")
    assert records[0].id == created.id


def test_update_uses_the_configured_formula(store, make_company, monkeypatch) -> None:
    monkeypatch.setenv("NET_INCOME_FORMULA", "owner_compensation")
    company = make_company()
    created = _submit(
        store,
        company.id,
        1,
        2024,
        ricavi=10000,
        costi_diretti=4000,
        costi_totali=7000,
        compenso_imprenditore=1500,
    ).record
    assert created.utile_netto == Decimal("4500.00")

    updated, _ = MonthlyDataService.update_monthly_record(
        store, created.id, {"compenso_imprenditore": 2000}
    )

    assert updated.utile_netto == Decimal("4000.00")


def test_update_rejects_period_changes(store, make_company) -> None:
    company = make_company()
    created = _submit(store, company.id, 1, 2024, ricavi=100).record

    with pytest.raises(BusinessValidationError, match="Campi non modificabili: month"):
        MonthlyDataService.update_monthly_record(store, created.id, {"month": 2})


def test_update_rejects_derived_values(store, make_company) -> None:
    company = make_company()
    created = _submit(store, company.id, 1, 2024, ricavi=100).record

    with pytest.raises(BusinessValidationError, match="Campi non modificabili: margine"):
        MonthlyDataService.update_monthly_record(store, created.id, {"margine": 1})


def test_amounts_beyond_the_column_range_are_stored_as_zero(store, make_company) -> None:
    company = make_company()

    record = _submit(store, company.id, 1, 2024, ricavi="1e30", costi_totali="50").record

    assert record.ricavi == Decimal("0.00")
    assert record.utile_netto == Decimal("-50.00")


def test_update_unknown_record(store) -> None:
    with pytest.raises(RecordNotFoundError):
        MonthlyDataService.update_monthly_record(
            store, "00000000-0000-0000-0000-000000000000", {"ricavi": 1}
        )


def test_delete_returns_remaining_records(store, make_company) -> None:
    company = make_company()
    january = _submit(store, company.id, 1, 2024, ricavi=100).record
    february = _submit(store, company.id, 2, 2024, ricavi=200).record

    company_id, records = MonthlyDataService.delete_monthly_record(store, january.id)

    assert company_id == company.id
    assert [record.id for record in records] == [february.id]
    with pytest.raises(RecordNotFoundError):
        MonthlyDataService.delete_monthly_record(store, january.id)

from __future__ import annotations

from decimal import Decimal

import pytest

from backend.app.services.record_store import (
    BUSINESS_TARGETS,
    COMPANIES,
    RecordNotFoundError,
    StoreError,
)


def test_insert_and_list_with_ordering(store, owner) -> None:
    store.insert_record(COMPANIES, {"name": "Alfa", "user_id": owner.id})
    store.insert_record(COMPANIES, {"name": "Beta", "user_id": owner.id})

    ascending = store.list_records(COMPANIES, {"user_id": owner.id}, order_by=("name",))
    descending = store.list_records(COMPANIES, {"user_id": owner.id}, order_by=("-name",))

    assert [company.name for company in ascending] == ["Alfa", "Beta"]
    assert [company.name for company in descending] == ["Beta", "Alfa"]


def test_upsert_updates_matching_key(store, make_company) -> None:
    company = make_company()
    key = ("company_id", "year")

    first = store.upsert_record(
        BUSINESS_TARGETS, key, {"company_id": company.id, "year": 2024, "target_ricavi": 10}
    )
    second = store.upsert_record(
        BUSINESS_TARGETS, key, {"company_id": company.id, "year": 2024, "target_ricavi": 20}
    )

    assert second.id == first.id
    assert second.target_ricavi == Decimal("20.00")
    assert len(store.list_records(BUSINESS_TARGETS, {"company_id": company.id})) == 1


def test_upsert_requires_key_values(store) -> None:
    with pytest.raises(ValueError):
        store.upsert_record(BUSINESS_TARGETS, ("company_id", "year"), {"year": 2024})


def test_unknown_records(store) -> None:
    missing = "00000000-0000-0000-0000-000000000000"

    assert store.get_record(COMPANIES, missing) is None
    assert store.get_record(COMPANIES, "not-a-uuid") is None
    with pytest.raises(RecordNotFoundError) as excinfo:
        store.update_record(COMPANIES, missing, {"name": "X"})
    assert excinfo.value.collection == COMPANIES
    with pytest.raises(RecordNotFoundError):
        store.delete_record(COMPANIES, missing)


def test_unknown_collection(store) -> None:
    with pytest.raises(ValueError):
        store.list_records("invoices")


def test_record_not_found_is_a_store_error() -> None:
    assert issubclass(RecordNotFoundError, StoreError)

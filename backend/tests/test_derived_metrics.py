from __future__ import annotations

from decimal import Decimal

import pytest

from backend.app.services.derived_metrics import (
    AlertType,
    BusinessValidationError,
    NetIncomeFormula,
    Period,
    advisory_notifications,
    coerce_amount,
    compute_alerts,
    compute_derived_metrics,
    normalize_period,
    resolve_net_income_formula,
)
from backend.app.services.notifications import NotificationVariant


def test_margin_is_revenue_minus_direct_costs() -> None:
    metrics = compute_derived_metrics(
        Decimal("10000"), Decimal("4000"), Decimal("7000"), Decimal("1500")
    )

    assert metrics.margine == Decimal("6000")
    assert metrics.utile_netto == Decimal("3000")


def test_owner_compensation_formula_subtracts_compensation_from_margin() -> None:
    metrics = compute_derived_metrics(
        Decimal("10000"),
        Decimal("4000"),
        Decimal("7000"),
        Decimal("1500"),
        formula=NetIncomeFormula.OWNER_COMPENSATION,
    )

    assert metrics.margine == Decimal("6000")
    assert metrics.utile_netto == Decimal("4500")


def test_formula_is_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("NET_INCOME_FORMULA", "owner_compensation")
    assert resolve_net_income_formula() is NetIncomeFormula.OWNER_COMPENSATION

    monkeypatch.setenv("NET_INCOME_FORMULA", "something-else")
    assert resolve_net_income_formula() is NetIncomeFormula.TOTAL_COSTS


def test_negative_results_are_kept() -> None:
    metrics = compute_derived_metrics(Decimal("1000"), Decimal("1500"), Decimal("2500"), 0)

    assert metrics.margine == Decimal("-500")
    assert metrics.utile_netto == Decimal("-1500")

    notices = advisory_notifications(metrics)
    assert len(notices) == 2
    assert all(notice.variant is NotificationVariant.DESTRUCTIVE for notice in notices)


def test_no_advisory_for_positive_results() -> None:
    metrics = compute_derived_metrics(Decimal("1000"), Decimal("100"), Decimal("200"), 0)

    assert advisory_notifications(metrics) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1234.5", Decimal("1234.50")),
        ("  99 ", Decimal("99.00")),
        ("", Decimal("0")),
        ("abc", Decimal("0")),
        (None, Decimal("0")),
        (-10, Decimal("0")),
        ("NaN", Decimal("0")),
        (True, Decimal("0")),
        (Decimal("10.005"), Decimal("10.01")),
        ("999999999999.99", Decimal("999999999999.99")),
        ("1000000000000", Decimal("0")),
        ("1e30", Decimal("0")),
    ],
)
def test_coerce_amount(raw, expected) -> None:
    assert coerce_amount(raw) == expected


def test_normalize_period_accepts_form_strings() -> None:
    assert normalize_period("3", "2024") == Period(year=2024, month=3)
    assert Period(year=2024, month=3).key == "2024-03"


@pytest.mark.parametrize(
    "month, year, message",
    [
        (None, 2024, "Seleziona un mese"),
        ("", 2024, "Seleziona un mese"),
        (13, 2024, "Seleziona un mese"),
        (0, 2024, "Seleziona un mese"),
        (5, None, "Seleziona un anno"),
        (5, "duemila", "Seleziona un anno"),
        (5, 999, "Seleziona un anno"),
    ],
)
def test_normalize_period_rejects_missing_values(month, year, message) -> None:
    with pytest.raises(BusinessValidationError, match=message):
        normalize_period(month, year)


def test_periods_sort_chronologically() -> None:
    periods = [Period(2024, 2), Period(2023, 12), Period(2024, 1)]

    assert sorted(periods) == [Period(2023, 12), Period(2024, 1), Period(2024, 2)]


def test_alert_raised_when_margin_below_target() -> None:
    alerts = compute_alerts(
        {"margine": Decimal("25000"), "utile_netto": Decimal("5000")},
        {"target_margine": Decimal("30000"), "target_utile_netto": None},
    )

    assert [alert.type for alert in alerts] == [AlertType.MARGIN_BELOW_TARGET]
    assert alerts[0].actual == Decimal("25000")
    assert alerts[0].target == Decimal("30000")
    assert alerts[0].message == "Margine sotto target del mese"


def test_no_alert_when_margin_meets_target() -> None:
    alerts = compute_alerts(
        {"margine": Decimal("35000"), "utile_netto": Decimal("5000")},
        {"target_margine": Decimal("30000")},
    )

    assert alerts == []


def test_absent_targets_never_raise_alerts() -> None:
    current = {"margine": Decimal("-100"), "utile_netto": Decimal("-100")}

    assert compute_alerts(current, None) == []
    assert compute_alerts(current, {"target_margine": None, "target_utile_netto": None}) == []
    assert compute_alerts(None, {"target_margine": Decimal("1")}) == []


def test_net_income_alert() -> None:
    alerts = compute_alerts(
        {"margine": Decimal("100"), "utile_netto": Decimal("10")},
        {"target_margine": Decimal("50"), "target_utile_netto": Decimal("20")},
    )

    assert [alert.type for alert in alerts] == [AlertType.NET_INCOME_BELOW_TARGET]
    assert alerts[0].message == "Utile netto sotto target del mese"

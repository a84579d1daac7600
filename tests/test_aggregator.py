import logging

import pytest

from expense_tracker.core.aggregator import category_totals, monthly_totals, summary_matches
from expense_tracker.core.ledger import Ledger
from expense_tracker.core.models import Expense, MalformedDateError


def _scenario_ledger():
    return Ledger([
        Expense("20/01/2024", "Lunch", "Food", 12.50),
        Expense("05/02/2024", "Bus", "Transport", 3.00),
        Expense("18/01/2024", "Dinner", "Food", 22.00),
    ])


def test_scenario_totals():
    ledger = _scenario_ledger()
    assert ledger.total() == pytest.approx(37.50)
    assert category_totals(ledger) == pytest.approx({"Food": 34.50, "Transport": 3.00})
    assert monthly_totals(ledger) == pytest.approx({"01/2024": 34.50, "02/2024": 3.00})


def test_empty_ledger_gives_empty_mappings():
    assert category_totals(Ledger()) == {}
    assert monthly_totals(Ledger()) == {}


def test_category_totals_keep_exact_case():
    ledger = Ledger([
        Expense("01/03/2024", "a", "Food", 10),
        Expense("02/03/2024", "b", "food", 5),
        Expense("03/03/2024", "c", "Food", 2),
    ])
    totals = category_totals(ledger)
    assert totals == {"Food": 12, "food": 5}
    assert list(totals) == ["Food", "food"]


def test_monthly_totals_groups_same_month():
    ledger = Ledger([
        Expense("01/03/2024", "a", "Food", 1.25),
        Expense("15/03/2024", "b", "Rent", 2.5),
    ])
    assert monthly_totals(ledger) == {"03/2024": 3.75}


def test_monthly_totals_order_of_first_appearance():
    ledger = Ledger([
        Expense("01/05/2024", "a", "x", 1),
        Expense("01/01/2024", "b", "x", 1),
        Expense("09/05/2024", "c", "x", 1),
    ])
    assert list(monthly_totals(ledger)) == ["05/2024", "01/2024"]


def test_monthly_totals_skips_and_reports_malformed(caplog):
    bad = Expense("1/3/24", "Broken", "Food", 99.0)
    ledger = Ledger([Expense("01/03/2024", "ok", "Food", 1.0), bad])
    skipped = []
    with caplog.at_level(logging.WARNING):
        totals = monthly_totals(ledger, skipped=skipped)
    assert totals == {"03/2024": 1.0}
    assert skipped == [bad]
    assert "malformed date" in caplog.text


def test_monthly_totals_strict_raises():
    ledger = Ledger([Expense("", "Broken", "Food", 1.0)])
    with pytest.raises(MalformedDateError):
        monthly_totals(ledger, strict=True)


def test_summary_matches_detects_stale_snapshot():
    ledger = _scenario_ledger()
    assert summary_matches({"Food": 34.5, "Transport": 3.0}, ledger)
    assert not summary_matches({"Food": 34.5}, ledger)
    assert not summary_matches({"Food": 30.0, "Transport": 3.0}, ledger)
    assert summary_matches({}, Ledger())


def test_monthly_totals_group_by_shape_not_calendar():
    ledger = Ledger([
        Expense("31/02/2024", "x", "Food", 5.0),
        Expense("10/02/2024", "y", "Food", 1.0),
        Expense("15/13/2024", "z", "Food", 2.0),
    ])
    assert monthly_totals(ledger, strict=True) == {"02/2024": 6.0, "13/2024": 2.0}

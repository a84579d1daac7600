# expense_tracker/core/aggregator.py
from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional

from expense_tracker.core.models import Expense, MalformedDateError

logger = logging.getLogger(__name__)


def category_totals(ledger: Iterable[Expense]) -> Dict[str, float]:
    """
    Sum amounts per category. Keys are the category strings exactly as
    entered ("Food" and "food" are separate), in order of first appearance.
    """
    totals: Dict[str, float] = {}
    for expense in ledger:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return totals


def monthly_totals(
    ledger: Iterable[Expense],
    strict: bool = False,
    skipped: Optional[List[Expense]] = None,
) -> Dict[str, float]:
    """
    Sum amounts per ``mm/yyyy`` month key, in order of first appearance.

    Expenses whose date is not ``dd/mm/yyyy`` are skipped and logged; pass a
    list as ``skipped`` to collect them. With ``strict=True`` the first such
    expense raises :class:`MalformedDateError` instead.
    """
    totals: Dict[str, float] = {}
    for expense in ledger:
        try:
            key = expense.month_key
        except MalformedDateError:
            if strict:
                raise
            logger.warning("Skipping expense with malformed date: %s", expense)
            if skipped is not None:
                skipped.append(expense)
            continue
        totals[key] = totals.get(key, 0.0) + expense.amount
    return totals


def summary_matches(summary: Dict[str, float], ledger: Iterable[Expense]) -> bool:
    """Return True when a saved category summary agrees with the ledger."""
    current = category_totals(ledger)
    if set(summary) != set(current):
        return False
    return all(
        math.isclose(float(summary[cat]), current[cat], rel_tol=1e-9, abs_tol=1e-9)
        for cat in current
    )

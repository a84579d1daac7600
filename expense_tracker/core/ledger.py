# expense_tracker/core/ledger.py
from __future__ import annotations

import threading
from typing import Iterable, Iterator, List, Optional, Tuple

from expense_tracker.core.models import Expense


class Ledger:
    """
    Ordered, in-memory collection of expenses.
    Insertion order is preserved and duplicates are allowed. Mutations hold a
    lock and reads work on a copy, so callers always see a consistent
    snapshot.
    """

    def __init__(self, expenses: Optional[Iterable[Expense]] = None):
        self._lock = threading.Lock()
        self._expenses: List[Expense] = list(expenses or [])

    def add(self, expense: Expense) -> None:
        with self._lock:
            self._expenses.append(expense)

    def all(self) -> Tuple[Expense, ...]:
        with self._lock:
            return tuple(self._expenses)

    def clear(self) -> None:
        with self._lock:
            self._expenses.clear()

    def filter_by_category(self, name: str) -> List[Expense]:
        """Return expenses whose category equals ``name``, ignoring case."""
        wanted = name.casefold()
        return [e for e in self.all() if e.category.casefold() == wanted]

    def total(self) -> float:
        return float(sum(e.amount for e in self.all()))

    def __iter__(self) -> Iterator[Expense]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._expenses)

    def __repr__(self):
        return f"Ledger({len(self)} expenses)"

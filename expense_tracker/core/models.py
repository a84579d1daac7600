# expense_tracker/core/models.py
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from datetime import date, datetime

_DATE_FORMAT = "%d/%m/%Y"
_DATE_SHAPE = re.compile(r"^\d{2}/\d{2}/\d{4}$")
_REQUIRED = ("date", "category", "amount")


class MalformedDateError(ValueError):
    """Raised when an expense date is not a valid ``dd/mm/yyyy`` string."""

    def __init__(self, value):
        super().__init__(f"Invalid date '{value}', expected dd/mm/yyyy")
        self.value = value


def check_date_shape(value) -> str:
    """Return ``value`` if it is shaped ``dd/mm/yyyy``; the calendar is not checked."""
    if not isinstance(value, str) or not _DATE_SHAPE.match(value):
        raise MalformedDateError(value)
    return value


def parse_date(value: str) -> date:
    """Parse a ``dd/mm/yyyy`` string into a real calendar date.

    ``strptime`` alone accepts single-digit days and months, so the shape is
    checked first.
    """
    check_date_shape(value)
    try:
        return datetime.strptime(value, _DATE_FORMAT).date()
    except ValueError as exc:
        raise MalformedDateError(value) from exc


def _to_amount(value) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount '{value}', expected a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid amount '{value}', expected a number")


@dataclass(frozen=True)
class Expense:
    date: str
    description: str
    category: str
    amount: float

    @classmethod
    def create(cls, date, description, category, amount):
        """Build an expense from raw user input, validating date and amount."""
        parse_date(date)
        return cls(date=date, description=description, category=category, amount=_to_amount(amount))

    @property
    def parsed_date(self) -> date:
        return parse_date(self.date)

    @property
    def month_key(self) -> str:
        """
        The ``mm/yyyy`` key used to group expenses by month. Only the shape
        of the date is checked, so ``31/02/2024`` still groups under
        ``02/2024``.
        """
        return check_date_shape(self.date)[3:10]

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data) -> "Expense":
        """
        Build an expense from a persisted entry. A missing description becomes
        empty and numeric strings are accepted as amounts; the date is kept
        as-is.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expense entry must be an object, got: {data!r}")
        missing = [name for name in _REQUIRED if data.get(name) is None]
        if missing:
            raise ValueError(f"Missing {', '.join(missing)} in expense entry: {data}")
        try:
            amount = _to_amount(data["amount"])
        except ValueError:
            raise ValueError(f"Non-numeric amount in expense entry: {data}")
        return cls(
            date=str(data["date"]),
            description=str(data.get("description") or ""),
            category=str(data["category"]),
            amount=amount,
        )

    def __str__(self):
        return f"{self.date} - {self.description} - {self.category} - ${self.amount:.2f}"

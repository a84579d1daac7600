# expense_tracker/storage.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict

from expense_tracker.core.ledger import Ledger
from expense_tracker.core.models import Expense

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """Raised when the ledger or a category summary cannot be written."""


def _read_json(path: Path, what: str):
    """Return the decoded file, or None when it is absent or unreadable."""
    if not path.exists():
        logger.info("No previous %s found at %s", what, path)
        return None
    try:
        with path.open("r", encoding="utf-8") as fp:
            return json.load(fp)
    except (OSError, ValueError) as exc:
        logger.warning("Error loading %s from %s: %s", what, path, exc)
        return None


def _write_json(path: Path, data, what: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fp:
            json.dump(data, fp, indent=4)
    except OSError as exc:
        raise PersistenceError(f"Error saving {what} to {path}: {exc}") from exc
    logger.info("Saved %s to %s", what, path.resolve())


def load_ledger(path) -> Ledger:
    """
    Load expenses from a JSON array. A missing, unreadable or wrongly shaped
    file yields an empty ledger. Entries that cannot be read are skipped one
    at a time. Problems are logged, never raised.
    """
    path = Path(path)
    data = _read_json(path, "expenses")
    if data is None:
        return Ledger()
    if not isinstance(data, list):
        logger.warning("Error loading expenses from %s: expected a JSON array", path)
        return Ledger()
    expenses = []
    for index, entry in enumerate(data):
        try:
            expenses.append(Expense.from_dict(entry))
        except ValueError as exc:
            logger.warning("Skipping entry %d in %s: %s", index, path, exc)
    logger.info("Loaded %d expense(s) from %s", len(expenses), path)
    return Ledger(expenses)


def save_ledger(ledger: Ledger, path) -> None:
    """Overwrite ``path`` with every expense in the ledger."""
    _write_json(Path(path), [e.to_dict() for e in ledger.all()], "expenses")


def load_category_summary(path) -> Dict[str, float]:
    """Load a saved category summary; degrades to an empty dict like load_ledger."""
    path = Path(path)
    data = _read_json(path, "category summary")
    if data is None:
        return {}
    if not isinstance(data, dict) or not all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in data.values()
    ):
        logger.warning(
            "Error loading category summary from %s: expected an object of numbers", path
        )
        return {}
    return {str(cat): float(total) for cat, total in data.items()}


def save_category_summary(summary: Dict[str, float], path) -> None:
    _write_json(Path(path), dict(summary), "category summary")

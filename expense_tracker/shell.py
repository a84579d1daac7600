# expense_tracker/shell.py
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import click

from expense_tracker.core.aggregator import category_totals, monthly_totals, summary_matches
from expense_tracker.core.ledger import Ledger
from expense_tracker.core.models import Expense
from expense_tracker.storage import (
    PersistenceError,
    load_category_summary,
    save_category_summary,
    save_ledger,
)

logger = logging.getLogger(__name__)

MENU = """
Expense Tracker Menu:
1. Add Expense
2. View Expenses
3. Total Expenses
4. Filter by Category
5. Monthly Summary
6. Clear All Entries
7. Exit
8. Save Category Summary
9. Load Category Summary
10. Display Category Summary"""

EXIT_CHOICE = 7


def echo_totals(title: str, totals: Dict[str, float]) -> None:
    click.echo(title)
    for key, value in totals.items():
        click.echo(f"{key}: ${value:.2f}")


class Shell:
    """
    Numbered text menu over a ledger. The ledger and file locations are
    passed in; nothing is read from module state.
    """

    def __init__(self, ledger: Ledger, expense_file, summary_file):
        self.ledger = ledger
        self.expense_file = expense_file
        self.summary_file = summary_file
        self.actions: Dict[int, Callable[[], None]] = {
            1: self.add_expense,
            2: self.view_expenses,
            3: self.total_expense,
            4: self.filter_by_category,
            5: self.monthly_summary,
            6: self.clear_entries,
            8: self.save_summary,
            9: self.load_summary,
            10: self.display_summary,
        }

    def run(self) -> None:
        while True:
            click.echo(MENU)
            raw = click.prompt("Choose an option", default="", show_default=False)
            try:
                choice = int(raw.strip())
            except ValueError:
                click.echo("Invalid input. Please enter a numeric value.")
                continue
            if choice == EXIT_CHOICE:
                click.echo("Saving expenses...")
                self.save()
                click.echo("Goodbye!")
                return
            action = self.actions.get(choice)
            if action is None:
                click.echo("Invalid option. Please try again.")
                continue
            action()

    def save(self) -> bool:
        try:
            save_ledger(self.ledger, self.expense_file)
        except PersistenceError as exc:
            click.echo(str(exc), err=True)
            return False
        click.echo(f"Expenses saved successfully to: {self.expense_file}")
        return True

    def add_expense(self) -> None:
        date = click.prompt("Enter date (dd/mm/yyyy)", default="", show_default=False)
        description = click.prompt("Enter description", default="", show_default=False)
        category = click.prompt("Enter category", default="", show_default=False)
        amount = click.prompt("Enter amount", default="", show_default=False)
        try:
            expense = Expense.create(date.strip(), description, category, amount.strip())
        except ValueError as exc:
            click.echo(f"Invalid input. {exc}.")
            return
        self.ledger.add(expense)
        click.echo("Expense added successfully.")

    def view_expenses(self) -> None:
        expenses = self.ledger.all()
        if not expenses:
            click.echo("No expenses to show.")
            return
        click.echo("Expenses:")
        for expense in expenses:
            click.echo(str(expense))

    def total_expense(self) -> None:
        if not self.ledger:
            click.echo("No expenses to calculate.")
            return
        click.echo(f"Total expense: ${self.ledger.total():.2f}")

    def filter_by_category(self) -> None:
        category = click.prompt("Enter category", default="", show_default=False)
        matches = self.ledger.filter_by_category(category)
        click.echo(f"Expenses in {category}:")
        if not matches:
            click.echo("No expenses found for the given category.")
            return
        for expense in matches:
            click.echo(str(expense))

    def monthly_summary(self) -> None:
        if not self.ledger:
            click.echo("No expenses available for summary.")
            return
        skipped = []
        totals = monthly_totals(self.ledger, skipped=skipped)
        echo_totals("Monthly Summary:", totals)
        for expense in skipped:
            click.echo(f"Skipped expense with invalid date: {expense}", err=True)

    def clear_entries(self) -> None:
        self.ledger.clear()
        click.echo("All entries have been cleared.")

    def save_summary(self) -> None:
        if not self.ledger:
            click.echo("No expenses available for summary.")
        try:
            save_category_summary(category_totals(self.ledger), self.summary_file)
        except PersistenceError as exc:
            click.echo(str(exc), err=True)
            return
        click.echo(f"Category Summary saved successfully to: {self.summary_file}")

    def load_summary(self) -> None:
        self._display(load_category_summary(self.summary_file))

    def display_summary(self) -> None:
        summary = load_category_summary(self.summary_file)
        if not summary:
            click.echo("No saved category summary found. Generating a new one.")
            if not self.ledger:
                click.echo("No expenses available for summary.")
            summary = category_totals(self.ledger)
        elif not summary_matches(summary, self.ledger):
            logger.info("Saved category summary at %s is stale", self.summary_file)
            click.echo("Note: the saved summary does not match the current expenses.")
        self._display(summary)

    def _display(self, summary: Optional[Dict[str, float]]) -> None:
        if not summary:
            click.echo("No category summary to display.")
            return
        echo_totals("Category Summary:", summary)

# expense_tracker/cli.py
import logging

import click
from dotenv import load_dotenv

from expense_tracker.config import DEFAULT_CONFIG, load_config, save_config
from expense_tracker.core.aggregator import category_totals, monthly_totals
from expense_tracker.core.models import Expense, MalformedDateError
from expense_tracker.shell import Shell, echo_totals
from expense_tracker.storage import PersistenceError, load_ledger, save_ledger

logger = logging.getLogger(__name__)


class State:
    def __init__(self, config, expense_file, summary_file):
        self.config = config
        self.expense_file = expense_file
        self.summary_file = summary_file
        self._ledger = None

    @property
    def ledger(self):
        if self._ledger is None:
            self._ledger = load_ledger(self.expense_file)
        return self._ledger

    def save(self):
        try:
            save_ledger(self.ledger, self.expense_file)
        except PersistenceError as e:
            raise click.ClickException(str(e))


pass_context = click.make_pass_decorator(State)


@click.group(invoke_without_command=True)
@click.option(
    '--config', 'config_path',
    default='expense-tracker.yaml',
    type=click.Path(dir_okay=False),
    help='Path to a YAML config file (defaults are used if it is missing)'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file, e.g. setting EXPENSE_TRACKER_LOG_LEVEL'
)
@click.option(
    '--expense-file', 'expense_file',
    default=None,
    type=click.Path(dir_okay=False),
    help='JSON file holding the expenses (overrides config)'
)
@click.option(
    '--summary-file', 'summary_file',
    default=None,
    type=click.Path(dir_okay=False),
    help='JSON file holding the saved category summary (overrides config)'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    help='Logging level (overrides config and environment)'
)
@click.pass_context
def main(ctx, config_path, env_file, expense_file, summary_file, log_level):
    """
    Record expenses and summarize them by category or month.
    Without a subcommand, starts the interactive menu. Expenses are kept in a
    JSON file that is loaded at startup and written back on exit.
    """
    if env_file:
        load_dotenv(env_file)

    try:
        cfg = load_config(config_path)
    except (ValueError, OSError) as e:
        raise click.ClickException(f"Error loading config: {e}")

    logging.basicConfig(level=(log_level or cfg['log_level']).upper())
    logger.debug("Using config %s", cfg)

    ctx.obj = State(
        cfg,
        expense_file or cfg['expense_file'],
        summary_file or cfg['summary_file'],
    )
    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


@main.command()
@pass_context
def menu(obj):
    """Run the interactive numbered menu."""
    click.echo("Loading existing expenses...")
    ledger = obj.ledger
    click.echo(f"Loaded {len(ledger)} expense(s).")
    Shell(ledger, obj.expense_file, obj.summary_file).run()


@main.command()
@click.argument('date')
@click.argument('description')
@click.argument('category')
@click.argument('amount')
@pass_context
def add(obj, date, description, category, amount):
    """Add one expense; DATE is dd/mm/yyyy."""
    try:
        expense = Expense.create(date, description, category, amount)
    except MalformedDateError as e:
        raise click.BadParameter(str(e), param_hint='DATE')
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='AMOUNT')
    obj.ledger.add(expense)
    obj.save()
    click.echo(f"Added: {expense}")


@main.command(name='list')
@click.option('--category', default=None, help='Only show this category (case-insensitive)')
@pass_context
def list_expenses(obj, category):
    """Print recorded expenses in the order they were added."""
    if category is None:
        expenses = obj.ledger.all()
    else:
        expenses = obj.ledger.filter_by_category(category)
    if not expenses:
        click.echo("No expenses to show.")
        return
    for expense in expenses:
        click.echo(str(expense))


@main.command()
@pass_context
def total(obj):
    """Print the total of all expenses."""
    if not obj.ledger:
        click.echo("No expenses to calculate.")
        return
    click.echo(f"Total expense: ${obj.ledger.total():.2f}")


@main.command()
@click.option(
    '--by', 'group_by',
    default='category',
    type=click.Choice(['category', 'month']),
    help='Group totals by category or by mm/yyyy month'
)
@click.option('--strict', is_flag=True, default=False,
              help='Fail on expenses with malformed dates instead of skipping them')
@pass_context
def summary(obj, group_by, strict):
    """Print totals grouped by category or month."""
    if not obj.ledger:
        click.echo("No expenses available for summary.")
        return
    if group_by == 'category':
        echo_totals("Category Summary:", category_totals(obj.ledger))
        return

    skipped = []
    try:
        totals = monthly_totals(obj.ledger, strict=strict, skipped=skipped)
    except MalformedDateError as e:
        raise click.ClickException(str(e))
    echo_totals("Monthly Summary:", totals)
    for expense in skipped:
        click.echo(f"Skipped expense with invalid date: {expense}", err=True)


@main.command()
@click.confirmation_option(prompt='Delete all expenses?')
@pass_context
def clear(obj):
    """Remove every expense and save the empty ledger."""
    obj.ledger.clear()
    obj.save()
    click.echo("All entries have been cleared.")


@main.command(name='init-config')
@click.argument('path', type=click.Path(dir_okay=False))
def init_config(path):
    """Write a config file with the default settings to PATH."""
    save_config(DEFAULT_CONFIG, path)
    click.echo(f"Wrote default config to {path}")

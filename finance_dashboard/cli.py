# finance_dashboard/cli.py
import logging
import os
import shlex

import click

from finance_dashboard.config import LOG_LEVELS, load_config
from finance_dashboard.core.ledger import Ledger
from finance_dashboard.core.models import ValidationError
from finance_dashboard.dashboard import PERIODS, build_dashboard
from finance_dashboard.utils import filter_transactions_by_month, parse_amount, parse_kind

HELP_TEXT = """\
Commands:
  add              record a transaction (prompts for the fields)
  remove ID        delete the transaction with the given id
  list [YYYY-MM]   show all transactions, or those in one month
  summary          show income, expense and balance
  chart [PERIOD]   show expense categories and income vs expense (all|month)
  help             show this message
  quit             leave the session"""


def _echo_summary(view):
    s = view.summary
    click.secho(f"Income:  {s.income_text}", fg='green')
    click.secho(f"Expense: {s.expense_text}", fg='red')
    click.echo(f"Balance: {s.balance_text}")


def _echo_table(view):
    if not view.rows:
        click.echo(f"📭 {view.empty_message}")
        return
    click.echo(f"{'ID':>4}  {'Date':<10}  {'Description':<24}  {'Type':<8}  Amount")
    for row in view.rows:
        click.echo(
            f"{row.id:>4}  {row.date:<10}  {row.description[:24]:<24}  "
            f"{row.badge:<8}  {row.amount_text}"
        )


def _echo_charts(view):
    pie = view.category_chart
    click.echo("Expenses by category:")
    if pie.placeholder:
        click.echo(f"  {pie.labels[0]}")
    else:
        for label, pct in zip(pie.labels, pie.percentages):
            bar = '#' * max(1, int(round(pct / 5)))
            click.echo(f"  {label[:20]:<20} {bar} {pct:.1f}%")

    bars = view.comparison_chart
    click.echo("Income vs expense:")
    for idx, period in enumerate(bars.labels):
        parts = [f"{ds['label']} {ds['data'][idx]:,.2f}" for ds in bars.datasets]
        click.echo(f"  {period}: " + " | ".join(parts))


class Session:
    """Interactive loop owning a single ledger for the lifetime of the process."""

    def __init__(self, ledger, config):
        self.ledger = ledger
        self.config = config

    def view(self, period='all'):
        return build_dashboard(self.ledger, self.config, period=period)

    def refresh(self):
        _echo_summary(self.view())

    def add(self):
        description = click.prompt('Description', default='', show_default=False)
        amount = click.prompt('Amount', default='', show_default=False)
        kind = click.prompt('Type (income/expense)', default='expense')
        when = click.prompt('Date (YYYY-MM-DD, blank for today)', default='', show_default=False)
        try:
            tx = self.ledger.add(
                description,
                parse_amount(amount),
                parse_kind(kind),
                date=when or None,
            )
        except ValidationError as e:
            click.echo(f"❌ Please fill in every field correctly: {e}", err=True)
            return
        click.echo(f"✅ Added #{tx.id}: {tx.description}")
        self.refresh()

    def remove(self, args):
        if len(args) != 1:
            click.echo("Usage: remove ID", err=True)
            return
        try:
            tx_id = int(args[0])
        except ValueError:
            click.echo(f"Invalid id: {args[0]}", err=True)
            return
        if self.ledger.remove(tx_id):
            click.echo(f"✅ Removed #{tx_id}")
            self.refresh()
        else:
            click.echo(f"⚠️  No transaction with id {tx_id}", err=True)

    def list(self, args):
        view = self.view()
        if args:
            try:
                ids = {tx.id for tx in filter_transactions_by_month(self.ledger.list(), args[0])}
            except ValidationError as e:
                click.echo(f"❌ {e}", err=True)
                return
            view.rows = [row for row in view.rows if row.id in ids]
            if not view.rows:
                view.empty_message = self.config['labels']['empty_table']
        _echo_table(view)

    def chart(self, args):
        period = args[0] if args else 'all'
        if period not in PERIODS:
            click.echo(f"Period must be one of: {', '.join(PERIODS)}", err=True)
            return
        _echo_charts(self.view(period))

    def handle(self, line):
        """Run one command line; return False when the session should end."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            click.echo(f"Could not parse command: {e}", err=True)
            return True
        if not parts:
            return True
        cmd, args = parts[0].lower(), parts[1:]
        if cmd in ('quit', 'exit', 'q'):
            return False
        if cmd == 'add':
            self.add()
        elif cmd in ('remove', 'rm', 'delete'):
            self.remove(args)
        elif cmd in ('list', 'ls'):
            self.list(args)
        elif cmd == 'summary':
            self.refresh()
        elif cmd == 'chart':
            self.chart(args)
        elif cmd == 'help':
            click.echo(HELP_TEXT)
        else:
            click.echo(f"Unknown command: {cmd} (try 'help')", err=True)
        return True

    def run(self):
        click.echo("Personal finance dashboard. Type 'help' for commands.")
        self.refresh()
        while True:
            try:
                line = click.prompt('cashboard', default='', show_default=False, prompt_suffix='> ')
            except click.exceptions.Abort:
                click.echo()
                break
            if not self.handle(line):
                break


@click.command()
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to a YAML config file (defaults apply when missing)'
)
@click.option(
    '--log-level',
    default=lambda: os.getenv('CASHBOARD_LOG_LEVEL', 'WARNING'),
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help='Logging verbosity (default: $CASHBOARD_LOG_LEVEL or WARNING)'
)
def main(config_path, log_level):
    """
    Start an interactive session that records income and expense
    transactions in memory and shows running totals and charts after
    every change. Nothing is saved when the session ends.
    """
    logging.basicConfig(level=log_level.upper())
    cfg = load_config(config_path)
    Session(Ledger(), cfg).run()

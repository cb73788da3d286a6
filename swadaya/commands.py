"""
Flask CLI commands for scheduled billing runs.

Usage (from project root, with venv active):
    flask --app run billing generate --period 2024-03
    flask --app run billing report --period 2024-03
"""
import click
from flask.cli import AppGroup

from swadaya.errors import LedgerError
from swadaya.services.billing import generate_monthly_bills
from swadaya.services.reports import get_monthly_report
from swadaya.utils.helpers import current_period

billing_cli = AppGroup("billing", help="Monthly billing tasks.")

_REPORT_LINES = [
    ("Subscription income", "subscription_income"),
    ("Installation income", "installation_income"),
    ("Total income",        "total_income"),
    ("Material expenses",   "material_expenses"),
    ("Net balance",         "net_balance"),
]


@billing_cli.command("generate")
@click.option("--period", default=None, help="Billing period YYYY-MM (default: current month).")
@click.option("--amount", default=None, help="Bill amount (default: monthly_fee setting).")
def generate_command(period, amount):
    """Generate unpaid bills for every eligible customer."""
    period = period or current_period()
    try:
        bills = generate_monthly_bills(period, amount=amount)
    except LedgerError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo(f"{period}: {len(bills)} bill(s) created")


@billing_cli.command("report")
@click.option("--period", default=None, help="Report period YYYY-MM (default: current month).")
def report_command(period):
    """Print the monthly balance sheet."""
    try:
        report = get_monthly_report(period)
    except LedgerError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo(f"=== {report['period']} ({report['start_date']} – {report['end_date']}) ===")
    for label, key in _REPORT_LINES:
        click.echo(f"  {label:<20} {report[key]:>15,}")
    click.echo(f"  {'Active customers':<20} {report['total_customers']:>15}")
    click.echo(f"  {'New installations':<20} {report['new_installations']:>15}")

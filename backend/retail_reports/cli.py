# Overview: Flask CLI command groups for bootstrap, bulk import, and report maintenance.

# backend/retail_reports/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Use: python -m flask --app retail_reports <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create missing tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Bulk import (run once, offline, before serving traffic):
# - python -m flask imports run
#   Load customers, invoices, products, sales from CUSTOMER_PATH/INVOICE_PATH/PRODUCT_PATH/SALE_PATH.
# - python -m flask imports run --customers c.json --invoices i.json --products p.json --sales s.json
#   Same, with explicit source files.
#
# Reports:
# - python -m flask reports recompute-totals
#   Recompute every invoice total from its sales.
# - python -m flask reports top-products --limit 5
# - python -m flask reports totals-by-condition
# - python -m flask reports top-customers --limit 5

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .money_utils import to_money
from .repositories.errors import SourceReadError, StoreError
from .services.aggregation_service import ReportError, default_engine
from .services.loader_service import LoaderConfig, run_import


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Database tables created.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask imports run' to load data.")


@click.group('imports')
def imports_group():
    """Bulk import commands."""


@imports_group.command('run')
@click.option('--customers', 'customer_path', help='Customers JSON array (default CUSTOMER_PATH)')
@click.option('--invoices', 'invoice_path', help='Invoices JSON array (default INVOICE_PATH)')
@click.option('--products', 'product_path', help='Products JSON array (default PRODUCT_PATH)')
@click.option('--sales', 'sale_path', help='Sales JSON array (default SALE_PATH)')
@with_appcontext
def run_import_cli(customer_path, invoice_path, product_path, sale_path):
    """
    Import customers, invoices, products and sales, in that order.

    Stops at the first bad record or failed save. Rows saved before the
    failure are kept; reset the database before re-running a failed import.
    """
    defaults = LoaderConfig.from_app_config(current_app.config)
    config = LoaderConfig(
        customer_path=customer_path or defaults.customer_path,
        invoice_path=invoice_path or defaults.invoice_path,
        product_path=product_path or defaults.product_path,
        sale_path=sale_path or defaults.sale_path,
    )

    click.echo("START Importing sources...")
    try:
        run_import(config)
    except (SourceReadError, StoreError) as e:
        click.echo(f"FAIL Import aborted: {e}")
        raise SystemExit(1)
    click.echo("DONE Import complete. Run 'python -m flask reports recompute-totals' next.")


@click.group('reports')
def reports_group():
    """Aggregation and report commands."""


@reports_group.command('recompute-totals')
@with_appcontext
def recompute_totals_cli():
    """Recompute every invoice total as SUM(quantity * price) of its sales."""
    try:
        default_engine().recompute_invoice_totals()
    except StoreError as e:
        click.echo(f"FAIL Recompute failed: {e}")
        raise SystemExit(1)
    click.echo("PASS Invoice totals recomputed.")


@reports_group.command('top-products')
@click.option('--limit', type=int, default=5, show_default=True)
@with_appcontext
def top_products_cli(limit):
    try:
        rows = default_engine().top_products(limit=limit)
    except (ReportError, StoreError) as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)

    if not rows:
        click.echo("No sales found.")
        return
    click.echo(f"{'ID':<6} {'Description':<40} {'Units'}")
    for row in rows:
        click.echo(f"{row.id:<6} {row.description[:40]:<40} {row.total}")


@reports_group.command('totals-by-condition')
@with_appcontext
def totals_by_condition_cli():
    try:
        rows = default_engine().invoice_totals_by_customer_condition()
    except StoreError as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)

    if not rows:
        click.echo("No invoices found.")
        return
    click.echo(f"{'Condition':<10} {'Total'}")
    for row in rows:
        click.echo(f"{row.condition:<10} {to_money(row.total):.2f}")


@reports_group.command('top-customers')
@click.option('--limit', type=int, default=5, show_default=True)
@with_appcontext
def top_customers_cli(limit):
    try:
        rows = default_engine().top_customers(limit=limit)
    except (ReportError, StoreError) as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)

    if not rows:
        click.echo("No customers found.")
        return
    click.echo(f"{'ID':<6} {'Name':<40} {'Amount'}")
    for row in rows:
        name = f"{row.first_name} {row.last_name}"
        click.echo(f"{row.id:<6} {name[:40]:<40} {to_money(row.amount):.2f}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(imports_group)
    app.cli.add_command(reports_group)

# Overview: Flask CLI command groups for bootstrap, inventory, and order inspection.

# backend/sales_system/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to "sales_system:create_app".
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create any missing tables (idempotent). Use "flask db upgrade" for migrations.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Inventory:
# - python -m flask inventory low --threshold 10
#   List agent stock at or below the threshold.
# - python -m flask inventory restock 1 5 25
#   Add 25 units of product 5 to agent 1.
#
# Orders:
# - python -m flask orders summary
#   Print the order summary projection.

import click
from flask import current_app
from flask.cli import with_appcontext

from .errors import SalesError
from .extensions import db
from .services import inventory_service, summary_service


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401
    db.create_all()
    click.echo("PASS Database schema is up to date")


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
    click.echo("BUILD Recreating schema...")
    db.create_all()
    click.echo("PASS Database reset complete")


@click.group('inventory')
def inventory_group():
    """Agent inventory inspection and restocking."""


@inventory_group.command('low')
@click.option('--threshold', type=int, default=None, help='Quantity at or below which stock is low')
@with_appcontext
def low_inventory(threshold):
    """List inventory rows at or below the threshold."""
    if threshold is None:
        threshold = current_app.config["LOW_INVENTORY_DEFAULT_THRESHOLD"]
    try:
        rows = inventory_service.low_inventory(threshold)
    except SalesError as e:
        raise click.ClickException(e.message)

    if not rows:
        click.echo(f"No inventory at or below {threshold} units")
        return

    click.echo(f"{'AGENT':<24} {'PRODUCT':<32} {'SUPPLIER':<24} {'QTY':>6}")
    for row in rows:
        click.echo(
            f"{row['AgentName']:<24} {row['ProductName']:<32} "
            f"{row['SupplierName']:<24} {row['quantity']:>6}"
        )


@inventory_group.command('restock')
@click.argument('agent_id', type=int)
@click.argument('product_id', type=int)
@click.argument('quantity', type=int)
@with_appcontext
def restock(agent_id, product_id, quantity):
    """Add QUANTITY units of PRODUCT_ID to AGENT_ID's stock."""
    try:
        row = inventory_service.restock(agent_id, product_id, quantity)
    except SalesError as e:
        raise click.ClickException(e.message)
    click.echo(
        f"PASS {row['agent_name']} now holds {row['quantity']} x {row['product_name']}"
    )


@click.group('orders')
def orders_group():
    """Order inspection commands."""


@orders_group.command('summary')
@with_appcontext
def orders_summary():
    """Print one line per order with totals."""
    summaries = summary_service.order_summaries()
    if not summaries:
        click.echo("No orders")
        return

    for row in summaries:
        click.echo(
            f"#{row['order_id']:<6} {row['OrderDate'] or '-':<21} {row['status']:<11} "
            f"{row['AgentName']} -> {row['ShopName']} "
            f"items={row['TotalItems']} qty={row['TotalQuantity']} "
            f"value={row['TotalOrderValue']:.2f} paid={row['PaymentAmount']:.2f} ({row['PaymentMethod']})"
        )


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(inventory_group)
    app.cli.add_command(orders_group)

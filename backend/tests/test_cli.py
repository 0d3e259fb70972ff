# Overview: Pytest coverage for the Flask CLI command groups.

from sales_system.models import Agent, Order, Product, Shop
from sales_system.services import inventory_service, order_service


def test_init_db_is_idempotent(app, db_session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["system", "init-db"])

    assert result.exit_code == 0
    assert "Database schema is up to date" in result.output


def test_reset_db_requires_confirmation(app, db_session, agent):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["system", "reset-db"], input="n\n")

    assert result.exit_code != 0
    assert "Database reset complete" not in result.output


def test_low_inventory_lists_rows(app, stocked):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["inventory", "low", "--threshold", "85"])

    assert result.exit_code == 0
    assert "Olive Oil" in result.output
    assert "Agent One" in result.output


def test_low_inventory_default_threshold(app, stocked):
    result = app.test_cli_runner().invoke(args=["inventory", "low"])

    assert result.exit_code == 0
    assert "No inventory at or below 10 units" in result.output


def test_restock_command(app, agent, product):
    result = app.test_cli_runner().invoke(
        args=["inventory", "restock", str(agent.id), str(product.id), "25"]
    )

    assert result.exit_code == 0
    assert "Agent One now holds 25 x Olive Oil" in result.output
    assert inventory_service.get_quantity(agent.id, product.id) == 25


def test_restock_command_rejects_zero(app, agent, product):
    result = app.test_cli_runner().invoke(
        args=["inventory", "restock", str(agent.id), str(product.id), "0"]
    )

    assert result.exit_code != 0
    assert "quantity must be greater than zero" in result.output


def test_orders_summary(app, stocked, order_kwargs):
    runner = app.test_cli_runner()
    assert "No orders" in runner.invoke(args=["orders", "summary"]).output

    order_id = order_service.place_order(**order_kwargs)
    result = runner.invoke(args=["orders", "summary"])

    assert result.exit_code == 0
    assert f"#{order_id}" in result.output
    assert "value=152.50" in result.output


def test_reset_db_recreates_schema(app, db_session, agent):
    result = app.test_cli_runner().invoke(args=["system", "reset-db", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Database reset complete" in result.output
    assert db_session.query(Agent).count() == 0


def test_column_indexes_match_migration_names():
    assert "ix_shops_sales_rep_id" in {ix.name for ix in Shop.__table__.indexes}
    assert "ix_products_supplier_id" in {ix.name for ix in Product.__table__.indexes}
    assert "ix_orders_shop_id" in {ix.name for ix in Order.__table__.indexes}

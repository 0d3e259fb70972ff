"""initial sales schema

Revision ID: b7c1d2e3f4a5
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the complete schema:
- suppliers, agents, sales_reps, shops: directory
- products, product_price_history: catalog with append-only price audit
- inventory: one row per (agent, product), quantity >= 0
- payments, orders, order_items: order placement (written in one transaction)
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b7c1d2e3f4a5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # ============================================================================
    # Directory
    # ============================================================================
    op.create_table(
        'suppliers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )

    op.create_table(
        'agents',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('phone_no', sa.String(length=20), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_agents_name', 'agents', ['name'])

    op.create_table(
        'sales_reps',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('territory', sa.String(length=100), nullable=True),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )

    op.create_table(
        'shops',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=200), nullable=True),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('sales_rep_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['sales_rep_id'], ['sales_reps.id'], name='fk_shops_sales_rep_id_sales_reps'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_shops_sales_rep_id', 'shops', ['sales_rep_id'])

    # ============================================================================
    # Catalog
    # ============================================================================
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('supplier_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('price >= 0', name='ck_products_price_non_negative'),
        sa.ForeignKeyConstraint(['supplier_id'], ['suppliers.id'], name='fk_products_supplier_id_suppliers'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_products_supplier_id', 'products', ['supplier_id'])
    op.create_index('ix_products_supplier_name', 'products', ['supplier_id', 'name'])

    op.create_table(
        'product_price_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('old_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('new_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('change_date', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], name='fk_product_price_history_product_id_products'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_price_history_product_date', 'product_price_history', ['product_id', 'change_date'])

    # ============================================================================
    # Inventory ledger: one row per (agent, product); never negative
    # ============================================================================
    op.create_table(
        'inventory',
        sa.Column('agent_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('last_update_date', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('quantity >= 0', name='ck_inventory_quantity_non_negative'),
        sa.ForeignKeyConstraint(['agent_id'], ['agents.id'], name='fk_inventory_agent_id_agents'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], name='fk_inventory_product_id_products'),
        sa.PrimaryKeyConstraint('agent_id', 'product_id')
    )
    op.create_index('ix_inventory_quantity', 'inventory', ['quantity'])

    # ============================================================================
    # Orders
    # ============================================================================
    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('method', sa.String(length=50), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('agent_id', sa.Integer(), nullable=False),
        sa.Column('shop_id', sa.Integer(), nullable=False),
        sa.Column('sales_rep_id', sa.Integer(), nullable=False),
        sa.Column('payment_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['agent_id'], ['agents.id'], name='fk_orders_agent_id_agents'),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], name='fk_orders_shop_id_shops'),
        sa.ForeignKeyConstraint(['sales_rep_id'], ['sales_reps.id'], name='fk_orders_sales_rep_id_sales_reps'),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id'], name='fk_orders_payment_id_payments'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('payment_id', name='uq_orders_payment_id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_orders_agent', 'orders', ['agent_id'])
    op.create_index('ix_orders_sales_rep', 'orders', ['sales_rep_id'])
    op.create_index('ix_orders_shop_id', 'orders', ['shop_id'])

    op.create_table(
        'order_items',
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('order_date', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('quantity > 0', name='ck_order_items_quantity_positive'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], name='fk_order_items_order_id_orders'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], name='fk_order_items_product_id_products'),
        sa.PrimaryKeyConstraint('order_id', 'product_id')
    )


def downgrade():
    op.drop_table('order_items')
    op.drop_index('ix_orders_shop_id', table_name='orders')
    op.drop_index('ix_orders_sales_rep', table_name='orders')
    op.drop_index('ix_orders_agent', table_name='orders')
    op.drop_table('orders')
    op.drop_table('payments')
    op.drop_index('ix_inventory_quantity', table_name='inventory')
    op.drop_table('inventory')
    op.drop_index('ix_price_history_product_date', table_name='product_price_history')
    op.drop_table('product_price_history')
    op.drop_index('ix_products_supplier_name', table_name='products')
    op.drop_index('ix_products_supplier_id', table_name='products')
    op.drop_table('products')
    op.drop_index('ix_shops_sales_rep_id', table_name='shops')
    op.drop_table('shops')
    op.drop_table('sales_reps')
    op.drop_index('ix_agents_name', table_name='agents')
    op.drop_table('agents')
    op.drop_table('suppliers')

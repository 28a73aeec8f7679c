"""Create catalog tables

Revision ID: 4c2e8a1f9b37
Revises:
Create Date: 2026-10-19 10:12:04.518233

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '4c2e8a1f9b37'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at():
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True)


def upgrade() -> None:
    """Upgrade schema."""
    # Reference data
    op.create_table(
        'categories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_categories_name'), 'categories', ['name'], unique=False)

    op.create_table(
        'depots',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_depots_name'), 'depots', ['name'], unique=False)

    op.create_table(
        'team_members',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_team_members_last_name'), 'team_members', ['last_name'], unique=False)
    op.create_index(op.f('ix_team_members_email'), 'team_members', ['email'], unique=False)

    # Catalog
    op.create_table(
        'products',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('reference', sa.String(), nullable=False),
        sa.Column('barcode', sa.String(), nullable=True),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('purchase_price', sa.Float(), nullable=False),
        sa.Column('sale_price', sa.Float(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        sa.Column('depot_id', sa.String(length=36), nullable=False),
        sa.Column('team_member_id', sa.String(length=36), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('is_composed', sa.Boolean(), nullable=False),
        sa.Column('components', sa.JSON(), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.CheckConstraint('purchase_price >= 0'),
        sa.CheckConstraint('sale_price >= 0'),
        sa.CheckConstraint('quantity >= 0'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.ForeignKeyConstraint(['depot_id'], ['depots.id']),
        sa.ForeignKeyConstraint(['team_member_id'], ['team_members.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_products_name'), 'products', ['name'], unique=False)
    op.create_index(op.f('ix_products_reference'), 'products', ['reference'], unique=True)
    op.create_index(op.f('ix_products_barcode'), 'products', ['barcode'], unique=False)
    op.create_index(op.f('ix_products_category_id'), 'products', ['category_id'], unique=False)
    op.create_index(op.f('ix_products_depot_id'), 'products', ['depot_id'], unique=False)

    op.create_table(
        'laptops',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('reference', sa.String(), nullable=False),
        sa.Column('barcode', sa.String(), nullable=True),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('brand', sa.String(), nullable=False),
        sa.Column('model', sa.String(), nullable=False),
        sa.Column('processor', sa.String(), nullable=True),
        sa.Column('graphics', sa.String(), nullable=True),
        sa.Column('ram', sa.String(), nullable=True),
        sa.Column('storage', sa.String(), nullable=True),
        sa.Column('display', sa.String(), nullable=True),
        sa.Column('condition', sa.String(), nullable=False),
        sa.Column('purchase_price', sa.Float(), nullable=False),
        sa.Column('sale_price', sa.Float(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        sa.Column('depot_id', sa.String(length=36), nullable=False),
        sa.Column('team_member_id', sa.String(length=36), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.CheckConstraint('purchase_price >= 0'),
        sa.CheckConstraint('sale_price >= 0'),
        sa.CheckConstraint('quantity >= 0'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.ForeignKeyConstraint(['depot_id'], ['depots.id']),
        sa.ForeignKeyConstraint(['team_member_id'], ['team_members.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_laptops_name'), 'laptops', ['name'], unique=False)
    op.create_index(op.f('ix_laptops_reference'), 'laptops', ['reference'], unique=True)
    op.create_index(op.f('ix_laptops_barcode'), 'laptops', ['barcode'], unique=False)
    op.create_index(op.f('ix_laptops_brand'), 'laptops', ['brand'], unique=False)
    op.create_index(op.f('ix_laptops_category_id'), 'laptops', ['category_id'], unique=False)
    op.create_index(op.f('ix_laptops_depot_id'), 'laptops', ['depot_id'], unique=False)

    op.create_table(
        'promotions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('product_id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.CheckConstraint('end_date >= start_date', name='ck_promotions_window'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_promotions_product_id'), 'promotions', ['product_id'], unique=False)

    op.create_table(
        'sale_items',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('sale_id', sa.String(length=36), nullable=False),
        sa.Column('product_id', sa.String(length=36), nullable=True),
        sa.Column('laptop_id', sa.String(length=36), nullable=True),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('unit_price', sa.Float(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['laptop_id'], ['laptops.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_sale_items_sale_id'), 'sale_items', ['sale_id'], unique=False)
    op.create_index(op.f('ix_sale_items_product_id'), 'sale_items', ['product_id'], unique=False)
    op.create_index(op.f('ix_sale_items_laptop_id'), 'sale_items', ['laptop_id'], unique=False)

    # Audit trail
    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_logs_id'), 'logs', ['id'], unique=False)
    op.create_index(op.f('ix_logs_ts'), 'logs', ['ts'], unique=False)
    op.create_index(op.f('ix_logs_action'), 'logs', ['action'], unique=False)
    op.create_index(op.f('ix_logs_resource'), 'logs', ['resource'], unique=False)
    op.create_index(op.f('ix_logs_status'), 'logs', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('logs')
    op.drop_table('sale_items')
    op.drop_table('promotions')
    op.drop_table('laptops')
    op.drop_table('products')
    op.drop_table('team_members')
    op.drop_table('depots')
    op.drop_table('categories')

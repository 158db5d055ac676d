"""initial_schema

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def _tenant_column():
    return sa.Column(
        'tenant_id', sa.String(length=64),
        sa.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        'tenants',
        sa.Column('tenant_id', sa.String(length=64), primary_key=True),
        sa.Column('org_name', sa.String(length=255), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_categories_tenant_name'),
        sa.UniqueConstraint('tenant_id', 'id', name='uq_categories_tenant_id'),
    )
    op.create_index('ix_categories_id', 'categories', ['id'])
    op.create_index('ix_categories_tenant_id', 'categories', ['tenant_id'])

    op.create_table(
        'suppliers',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('contact_person', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_suppliers_tenant_name'),
        sa.UniqueConstraint('tenant_id', 'id', name='uq_suppliers_tenant_id'),
    )
    op.create_index('ix_suppliers_id', 'suppliers', ['id'])
    op.create_index('ix_suppliers_tenant_id', 'suppliers', ['tenant_id'])

    op.create_table(
        'products',
        sa.Column('product_id', sa.Integer(), primary_key=True),
        _tenant_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('brand', sa.String(length=255), nullable=False),
        sa.Column('purchase_price', sa.Numeric(12, 4), nullable=False),
        sa.Column('mrp', sa.Numeric(12, 4), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('supplier_id', sa.Integer(), nullable=True),
        sa.Column('dimensions', sa.String(length=255), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('purchase_price >= 0', name='ck_products_purchase_price_non_negative'),
        sa.CheckConstraint('mrp >= 0', name='ck_products_mrp_non_negative'),
        sa.UniqueConstraint('tenant_id', 'product_id', name='uq_products_tenant_id'),
        sa.ForeignKeyConstraint(
            ['tenant_id', 'category_id'], ['categories.tenant_id', 'categories.id'],
            name='fk_products_category_same_tenant',
        ),
        sa.ForeignKeyConstraint(
            ['tenant_id', 'supplier_id'], ['suppliers.tenant_id', 'suppliers.id'],
            name='fk_products_supplier_same_tenant',
        ),
    )
    op.create_index('ix_products_product_id', 'products', ['product_id'])
    op.create_index('ix_products_tenant_id', 'products', ['tenant_id'])
    op.create_index('ix_products_category_id', 'products', ['category_id'])
    op.create_index('ix_products_supplier_id', 'products', ['supplier_id'])

    op.create_table(
        'inventory',
        sa.Column(
            'tenant_id', sa.String(length=64),
            sa.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), primary_key=True,
        ),
        sa.Column('product_id', sa.Integer(), primary_key=True),
        sa.Column('location', sa.String(length=255), primary_key=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('quantity >= 0', name='ck_inventory_quantity_non_negative'),
        sa.ForeignKeyConstraint(
            ['tenant_id', 'product_id'], ['products.tenant_id', 'products.product_id'],
            ondelete='CASCADE', name='fk_inventory_product_same_tenant',
        ),
    )

    op.create_table(
        'sales',
        sa.Column('sale_id', sa.Integer(), primary_key=True),
        _tenant_column(),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('selling_price', sa.Numeric(12, 4), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('quantity > 0', name='ck_sales_quantity_positive'),
        sa.CheckConstraint('selling_price >= 0', name='ck_sales_selling_price_non_negative'),
    )
    op.create_index('ix_sales_sale_id', 'sales', ['sale_id'])
    op.create_index('ix_sales_tenant_id', 'sales', ['tenant_id'])
    op.create_index('ix_sales_product_id', 'sales', ['product_id'])
    op.create_index('ix_sales_created_at', 'sales', ['created_at'])

    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), primary_key=True),
        _tenant_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column(
            'role', sa.Enum('ADMIN', 'MANAGER', 'STAFF', 'VIEWER', name='userrole'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('tenant_id', 'email', name='uq_users_tenant_email'),
    )
    op.create_index('ix_users_user_id', 'users', ['user_id'])
    op.create_index('ix_users_tenant_id', 'users', ['tenant_id'])


def downgrade() -> None:
    op.drop_table('users')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
    op.drop_table('sales')
    op.drop_table('inventory')
    op.drop_table('products')
    op.drop_table('suppliers')
    op.drop_table('categories')
    op.drop_table('tenants')

"""Initial minimarket schema

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-10-19 09:12:31.504117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3f2a9c1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_categories_id'), 'categories', ['id'], unique=False)

    op.create_table(
        'units',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('abbreviation', sa.String(), nullable=False),
        sa.Column('conversion_factor', sa.Numeric(precision=10, scale=4), nullable=False),
        sa.Column('base_unit_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('conversion_factor > 0'),
        sa.ForeignKeyConstraint(['base_unit_id'], ['units.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_units_id'), 'units', ['id'], unique=False)

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kode_brg', sa.String(), nullable=False),
        sa.Column('nama_brg', sa.String(), nullable=False),
        sa.Column('kategori_id', sa.Integer(), nullable=True),
        sa.Column('satuan_default', sa.String(), nullable=False),
        sa.Column('isi_per_satuan', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('harga_beli', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('harga_jual', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('stok_min', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('stok_max', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('current_stock', sa.Numeric(precision=15, scale=2), server_default='0', nullable=False),
        sa.Column('barcode', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('isi_per_satuan > 0'),
        sa.CheckConstraint('harga_beli >= 0'),
        sa.CheckConstraint('harga_jual >= 0'),
        sa.CheckConstraint('stok_min >= 0'),
        sa.CheckConstraint('stok_max >= 0'),
        sa.CheckConstraint('current_stock >= 0'),
        sa.ForeignKeyConstraint(['kategori_id'], ['categories.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_products_id'), 'products', ['id'], unique=False)
    op.create_index(op.f('ix_products_kode_brg'), 'products', ['kode_brg'], unique=True)
    op.create_index(op.f('ix_products_nama_brg'), 'products', ['nama_brg'], unique=False)
    op.create_index(op.f('ix_products_barcode'), 'products', ['barcode'], unique=False)

    op.create_table(
        'stock_adjustments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('adjustment_type', sa.Enum('in', 'out', 'opname', name='adjustment_type'), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('reason', sa.String(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('ref_type', sa.String(length=20), nullable=True),
        sa.Column('ref_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('quantity >= 0'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_stock_adjustments_id'), 'stock_adjustments', ['id'], unique=False)
    op.create_index(op.f('ix_stock_adjustments_product_id'), 'stock_adjustments', ['product_id'], unique=False)
    op.create_index(op.f('ix_stock_adjustments_ref_type'), 'stock_adjustments', ['ref_type'], unique=False)
    op.create_index(op.f('ix_stock_adjustments_ref_id'), 'stock_adjustments', ['ref_id'], unique=False)
    op.create_index(op.f('ix_stock_adjustments_created_at'), 'stock_adjustments', ['created_at'], unique=False)

    op.create_table(
        'purchases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('f_beli', sa.String(), nullable=False),
        sa.Column('no_pb', sa.String(), nullable=True),
        sa.Column('tgl_beli', sa.Date(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('kode_brg', sa.String(), nullable=False),
        sa.Column('nama_brg', sa.String(), nullable=False),
        sa.Column('satuan', sa.String(), nullable=False),
        sa.Column('jumlah', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('hrg_beli', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('disc1', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('disc2', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('disc3', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('disc_rp', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('codesup', sa.String(), nullable=True),
        sa.Column('nama', sa.String(), nullable=True),
        sa.Column('acc', sa.String(), nullable=True),
        sa.Column('opr', sa.String(), nullable=True),
        sa.Column('dateopr', sa.Date(), nullable=True),
        sa.Column('f_order', sa.String(), nullable=True),
        sa.Column('jt_tempo', sa.Integer(), nullable=True),
        sa.Column('hrg_beli_lama', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('tunai', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('ppn', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('lama', sa.Integer(), nullable=True),
        sa.Column('isi', sa.Integer(), nullable=True),
        sa.Column('grup', sa.String(), nullable=True),
        sa.Column('profit', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('hrg_lama', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('hrg_jual', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('q_barcode', sa.String(), nullable=True),
        sa.Column('barcode', sa.String(), nullable=True),
        sa.Column('lama1', sa.Integer(), nullable=True),
        sa.Column('urutan', sa.Integer(), nullable=True),
        sa.Column('alamat', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('jumlah > 0'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f('ix_purchases_id'), 'purchases', ['id'], unique=False)
    op.create_index(op.f('ix_purchases_f_beli'), 'purchases', ['f_beli'], unique=True)
    op.create_index(op.f('ix_purchases_tgl_beli'), 'purchases', ['tgl_beli'], unique=False)
    op.create_index(op.f('ix_purchases_kode_brg'), 'purchases', ['kode_brg'], unique=False)
    op.create_index(op.f('ix_purchases_product_id'), 'purchases', ['product_id'], unique=False)
    op.create_index(op.f('ix_purchases_codesup'), 'purchases', ['codesup'], unique=False)

    op.create_table(
        'sales',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tgl_jual', sa.Date(), nullable=False),
        sa.Column('f_jual', sa.String(), nullable=False),
        sa.Column('acc', sa.String(), nullable=True),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('kode_brg', sa.String(), nullable=False),
        sa.Column('nama_brg', sa.String(), nullable=False),
        sa.Column('satuan', sa.String(), nullable=False),
        sa.Column('jumlah', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('hrg_jual', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('disc1', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('disc2', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('disc3', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('disc_rp', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('ppn', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('codelg', sa.String(), nullable=True),
        sa.Column('nama_lg', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('jumlah > 0'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f('ix_sales_id'), 'sales', ['id'], unique=False)
    op.create_index(op.f('ix_sales_f_jual'), 'sales', ['f_jual'], unique=True)
    op.create_index(op.f('ix_sales_tgl_jual'), 'sales', ['tgl_jual'], unique=False)
    op.create_index(op.f('ix_sales_kode_brg'), 'sales', ['kode_brg'], unique=False)
    op.create_index(op.f('ix_sales_product_id'), 'sales', ['product_id'], unique=False)

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('resource_id', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
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
    op.drop_table('sales')
    op.drop_table('purchases')
    op.drop_table('stock_adjustments')
    op.drop_table('products')
    op.drop_table('units')
    op.drop_table('categories')
    op.drop_table('users')
    sa.Enum(name='adjustment_type').drop(op.get_bind(), checkfirst=True)

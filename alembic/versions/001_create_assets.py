"""Create assets table

Revision ID: 001_create_assets
Revises:
Create Date: 2025-08-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_assets'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'assets',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('code', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('asset_type', sa.String(50), nullable=False, server_default='Truck'),
        sa.Column('vin', sa.String(17), nullable=True),
        sa.Column('plate', sa.String(20), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('make', sa.String(100), nullable=True),
        sa.Column('model', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('meter_unit', sa.String(10), nullable=False, server_default='MILES'),
        sa.Column('current_meter', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id', name='pk_assets')
    )
    # code is indexed for lookups but not unique
    op.create_index('ix_assets_code', 'assets', ['code'], unique=False)
    op.create_index('ix_assets_created_at', 'assets', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_assets_created_at', table_name='assets')
    op.drop_index('ix_assets_code', table_name='assets')
    op.drop_table('assets')

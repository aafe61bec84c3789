"""Create users and dustbins tables

Revision ID: 20261019_create_users_and_dustbins
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261019_create_users_and_dustbins'
down_revision = None
branch_labels = None
depends_on = None

dustbin_status = sa.Enum('active', 'full', 'damaged', 'removed', name='dustbin_status', create_constraint=True)


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('google_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('picture', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_google_id', 'users', ['google_id'], unique=True)

    op.create_table(
        'dustbins',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('latitude', sa.Numeric(precision=10, scale=8), nullable=False),
        sa.Column('longitude', sa.Numeric(precision=11, scale=8), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.Column('status', dustbin_status, server_default='active', nullable=False),
        sa.Column('reported_by', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_dustbins_status_created_at', 'dustbins', ['status', sa.text('created_at DESC')])


def downgrade():
    op.drop_index('idx_dustbins_status_created_at', table_name='dustbins')
    op.drop_table('dustbins')
    op.drop_index('ix_users_google_id', table_name='users')
    op.drop_table('users')

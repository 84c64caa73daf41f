"""initial schema: clients, devices, repair jobs, counters

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'clients',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('phone_number', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_clients_created_at', 'clients', ['created_at'])

    op.create_table(
        'devices',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('client_id', sa.Uuid(), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('type', sa.String(100), nullable=False),
        sa.Column('brand', sa.String(100), nullable=True),
        sa.Column('model', sa.String(100), nullable=True),
        sa.Column('serial', sa.String(100), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_devices_client_id', 'devices', ['client_id'])
    op.create_index('ix_devices_created_at', 'devices', ['created_at'])

    op.create_table(
        'repair_jobs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('device_id', sa.Uuid(), sa.ForeignKey('devices.id'), nullable=False),
        sa.Column('unique_code', sa.String(50), nullable=False),
        sa.Column('entry_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('exit_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('emergency_level', sa.String(20), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('issue', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_repair_jobs_device_id', 'repair_jobs', ['device_id'])
    op.create_index('ix_repair_jobs_unique_code', 'repair_jobs', ['unique_code'], unique=True)
    op.create_index('ix_repair_jobs_status', 'repair_jobs', ['status'])
    op.create_index('ix_repair_jobs_created_at', 'repair_jobs', ['created_at'])

    op.create_table(
        'counters',
        sa.Column('name', sa.String(50), primary_key=True),
        sa.Column('value', sa.BigInteger(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('counters')
    op.drop_table('repair_jobs')
    op.drop_table('devices')
    op.drop_table('clients')

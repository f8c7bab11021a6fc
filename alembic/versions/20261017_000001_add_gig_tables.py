"""Add gig tables

Revision ID: 20261017_000001
Revises:
Create Date: 2026-10-17

This migration adds the following tables:
- users: Account owners linked to Supabase auth users
- gigs: Performances with their deal terms
- band_members: Musicians paid out by the manager
- gig_band_members: Gig/member links with earned amount snapshot
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '20261017_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _money(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.Numeric(precision=12, scale=2),
        nullable=nullable,
        server_default=None if nullable else '0',
    )


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('supabase_id', sa.String(100), nullable=False, unique=True, index=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create gigs table
    op.create_table(
        'gigs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('event_name', sa.String(255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False, index=True),
        sa.Column('performers', sa.String(255), nullable=False),
        sa.Column('number_of_musicians', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('is_charity', sa.Boolean(), nullable=False, server_default=sa.false()),
        _money('performance_fee'),
        _money('technical_fee'),
        sa.Column('manager_bonus_type', sa.String(20), nullable=False, server_default='fixed'),
        _money('manager_bonus_amount'),
        sa.Column('claim_performance_fee', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('claim_technical_fee', sa.Boolean(), nullable=False, server_default=sa.true()),
        _money('technical_fee_claim_amount', nullable=True),
        sa.Column('manager_handles_distribution', sa.Boolean(), nullable=False, server_default=sa.true()),
        _money('advance_received_by_manager'),
        _money('advance_to_musicians'),
        sa.Column('payment_received', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_received_date', sa.Date(), nullable=True),
        sa.Column('band_paid', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('band_paid_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('booking_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now(), onupdate=sa.func.now()),
        sa.CheckConstraint('number_of_musicians >= 1', name='check_number_of_musicians_positive'),
        sa.CheckConstraint("manager_bonus_type IN ('fixed', 'percentage')", name='check_manager_bonus_type'),
    )
    op.create_index('idx_gigs_user_date', 'gigs', ['user_id', 'date'])

    # Create band_members table
    op.create_table(
        'band_members',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('instrument', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    # Create gig_band_members table
    op.create_table(
        'gig_band_members',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('gig_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('gigs.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('band_member_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('band_members.id', ondelete='CASCADE'), nullable=False, index=True),
        _money('earned_amount'),
        _money('paid_amount'),
        sa.UniqueConstraint('gig_id', 'band_member_id', name='uq_gig_band_member'),
    )


def downgrade() -> None:
    op.drop_table('gig_band_members')
    op.drop_table('band_members')
    op.drop_index('idx_gigs_user_date', table_name='gigs')
    op.drop_table('gigs')
    op.drop_table('users')

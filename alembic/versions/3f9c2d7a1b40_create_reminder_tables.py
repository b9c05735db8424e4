"""create profiles, weekly_events, medications and sms_reminders tables

Revision ID: 3f9c2d7a1b40
Revises:
Create Date: 2026-10-19 09:12:31.204117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2d7a1b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('sms_notifications_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sms_opt_in_shown', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('timezone', sa.String(length=64), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'weekly_events',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('dose_time', sa.Time(timezone=False), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('inserted_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('day_of_week BETWEEN 1 AND 7', name='ck_weekly_events_day_of_week'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_weekly_events_day_of_week', 'weekly_events', ['day_of_week'], unique=False)
    op.create_index('idx_weekly_events_user_id', 'weekly_events', ['user_id'], unique=False)
    op.create_table(
        'medications',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('schedule_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('brand_name', sa.Text(), nullable=True),
        sa.Column('generic_name', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['schedule_id'], ['weekly_events.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_medications_schedule_id', 'medications', ['schedule_id'], unique=False)
    op.create_table(
        'sms_reminders',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('event_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('reminder_date', sa.Date(), nullable=False),
        sa.Column('message_sent', sa.Text(), nullable=False),
        sa.Column('provider_message_id', sa.String(length=255), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['weekly_events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'reminder_date', name='uq_sms_reminders_event_date'),
    )
    op.create_index('idx_sms_reminders_reminder_date', 'sms_reminders', ['reminder_date'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_sms_reminders_reminder_date', table_name='sms_reminders')
    op.drop_table('sms_reminders')
    op.drop_index('idx_medications_schedule_id', table_name='medications')
    op.drop_table('medications')
    op.drop_index('idx_weekly_events_user_id', table_name='weekly_events')
    op.drop_index('idx_weekly_events_day_of_week', table_name='weekly_events')
    op.drop_table('weekly_events')
    op.drop_table('profiles')

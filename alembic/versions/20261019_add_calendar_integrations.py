"""Add calendar_integrations table for OAuth credentials

Revision ID: 3f1a7c2e9b40
Revises:
Create Date: 2026-10-19

Each user has one integration per calendar provider (currently Google).
The sync client rewrites access_token/token_expiry on refresh.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a7c2e9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('calendar_integrations',
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('provider', sa.String(length=50), nullable=False, server_default='google'),
        sa.Column('access_token', sa.Text(), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=False),
        sa.Column('token_expiry', sa.DateTime(timezone=True), nullable=True),
        sa.Column('id', sa.CHAR(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('calendar_integrations', schema=None) as batch_op:
        batch_op.create_index('ix_calendar_integrations_user_id', ['user_id'], unique=False)
        batch_op.create_index('ix_calendar_integrations_user_provider', ['user_id', 'provider'], unique=True)


def downgrade() -> None:
    with op.batch_alter_table('calendar_integrations', schema=None) as batch_op:
        batch_op.drop_index('ix_calendar_integrations_user_provider')
        batch_op.drop_index('ix_calendar_integrations_user_id')
    op.drop_table('calendar_integrations')

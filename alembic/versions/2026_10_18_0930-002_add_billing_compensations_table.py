"""Add billing_compensations table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18 09:30:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create billing_compensations table."""
    op.create_table('billing_compensations', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('billing_customer_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_billing_compensations_billing_customer_id'), 'billing_compensations',
                    ['billing_customer_id'], unique=False)


def downgrade() -> None:
    """Drop billing_compensations table."""
    op.drop_index(op.f('ix_billing_compensations_billing_customer_id'), table_name='billing_compensations')
    op.drop_table('billing_compensations')

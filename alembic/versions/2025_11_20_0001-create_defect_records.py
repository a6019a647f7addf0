"""Create defect_records table

Revision ID: 3f1c2a9d7b01
Revises:
Create Date: 2025-11-20 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b01'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create defect_records and its date index."""
    op.create_table(
        'defect_records',
        sa.Column('id', sa.Uuid(), primary_key=True, comment='Record ID'),
        sa.Column('date', sa.Date(), nullable=False, comment='Defect date (YYYY-MM-DD)'),
        sa.Column('respondent', sa.String(100), nullable=False, comment='Name of the person reporting the defect'),
        sa.Column('process_step', sa.String(50), nullable=True, comment='Process step name'),
        sa.Column('cause_category', sa.String(50), nullable=True, comment='Cause category name'),
        sa.Column('comment', sa.Text(), nullable=False, server_default='', comment='Free-text comment'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='Row creation time'),
    )
    op.create_index('ix_defect_records_date', 'defect_records', ['date'])


def downgrade() -> None:
    op.drop_index('ix_defect_records_date', table_name='defect_records')
    op.drop_table('defect_records')

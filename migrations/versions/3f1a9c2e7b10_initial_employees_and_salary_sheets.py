"""initial employees and salary_sheets (attendance codes P/A/H/PP)

Revision ID: 3f1a9c2e7b10
Revises:
Create Date: 2025-08-04 11:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'employees',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('position', sa.Text(), nullable=False),
        sa.Column('basic', sa.Integer(), nullable=False),
        sa.Column('hra', sa.Integer(), nullable=False),
        sa.Column('allowance', sa.Integer(), nullable=False),
        sa.Column('attendance', sa.JSON(), nullable=False),
    )
    op.create_table(
        'salary_sheets',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('month', sa.Text(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('total_days', sa.Integer(), nullable=False),
        sa.Column('employee_data', sa.JSON(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('salary_sheets')
    op.drop_table('employees')

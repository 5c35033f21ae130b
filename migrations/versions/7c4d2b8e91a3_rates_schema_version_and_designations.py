"""esi/pf rates, other_deduction, schema_version; designations table

Revision ID: 7c4d2b8e91a3
Revises: 3f1a9c2e7b10
Create Date: 2025-08-19 16:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c4d2b8e91a3'
down_revision: Union[str, Sequence[str], None] = '3f1a9c2e7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # rows written before this revision keep schema_version=1 and NULL rates
    with op.batch_alter_table('employees') as batch:
        batch.add_column(sa.Column('esi_rate', sa.Integer(), nullable=True))
        batch.add_column(sa.Column('pf_rate', sa.Integer(), nullable=True))
        batch.add_column(sa.Column('other_deduction', sa.Integer(), nullable=False, server_default='0'))
        batch.add_column(sa.Column('schema_version', sa.Integer(), nullable=False, server_default='1'))

    op.create_table(
        'designations',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Integer(), nullable=False, server_default='1'),
    )


def downgrade() -> None:
    op.drop_table('designations')
    with op.batch_alter_table('employees') as batch:
        batch.drop_column('schema_version')
        batch.drop_column('other_deduction')
        batch.drop_column('pf_rate')
        batch.drop_column('esi_rate')

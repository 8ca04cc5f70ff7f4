"""Initial registry schema

Revision ID: 0001
Revises:
Create Date: 2016-11-01 00:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Enrollment identities
    op.create_table(
        'Users',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('token', sa.Text(), nullable=False, server_default=''),
        sa.Column('type', sa.String(64), nullable=False, server_default=''),
        sa.Column('attributes', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('state', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('serial_number', sa.String(64), nullable=False, server_default=''),
        sa.Column('authority_key_identifier', sa.String(128), nullable=False, server_default=''),
    )

    # Group hierarchy; NULL parent_id marks the root
    op.create_table(
        'Groups',
        sa.Column('name', sa.String(64), primary_key=True),
        sa.Column('parent_id', sa.String(64), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('Groups')
    op.drop_table('Users')

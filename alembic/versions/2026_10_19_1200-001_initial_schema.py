"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Showtimes table; column names match the venue's existing table
    op.create_table(
        'movies2',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Data', sa.Date(), nullable=False),
        sa.Column('ID Film TMDb', sa.String(length=50), nullable=False),
        sa.Column('Orario Inizio', sa.Time(), nullable=False),
        sa.Column('Orario Fine', sa.Time(), nullable=False),
        sa.Column('Lingua', sa.String(length=100), nullable=False),
        sa.Column('Sottotitoli', sa.String(length=100), nullable=True),
        sa.Column('Pretix Event ID', sa.String(length=100), nullable=False),
        sa.Column('Sold Out', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('Titolo', sa.String(length=500), nullable=False),
        sa.Column('Mark', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_movies2_ID Film TMDb'), 'movies2', ['ID Film TMDb'], unique=False)
    op.create_index('ix_movies2_date_start', 'movies2', ['Data', 'Orario Inizio'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_movies2_date_start', table_name='movies2')
    op.drop_index(op.f('ix_movies2_ID Film TMDb'), table_name='movies2')
    op.drop_table('movies2')

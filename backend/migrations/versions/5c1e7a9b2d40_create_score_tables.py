"""create unclaimed_score and leaderboard_entry tables

Revision ID: 5c1e7a9b2d40
Revises:
Create Date: 2025-08-20 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c1e7a9b2d40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'unclaimed_score' not in existing_tables:
        op.create_table(
            'unclaimed_score',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('color', sa.String(length=7), nullable=False),
            sa.Column('created_at', sa.Float(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )

    if 'leaderboard_entry' not in existing_tables:
        op.create_table(
            'leaderboard_entry',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('nickname', sa.Text(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_leaderboard_entry_score'), 'leaderboard_entry', ['score'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_leaderboard_entry_score'), table_name='leaderboard_entry')
    op.drop_table('leaderboard_entry')
    op.drop_table('unclaimed_score')

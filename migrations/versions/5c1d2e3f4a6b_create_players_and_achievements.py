"""create players and achievements tables

Revision ID: 5c1d2e3f4a6b
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c1d2e3f4a6b'
down_revision = None
branch_labels = None
depends_on = None

ACHIEVEMENT_TITLES = (
    'First game',
    '5 games played',
    '10 games played',
    'Quick win',
    'Hard level',
    'Memory master',
)


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    tables = set(insp.get_table_names())
    if 'players' not in tables:
        op.create_table(
            'players',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('coins', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('games_played', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('games_won', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.CheckConstraint('coins >= 0', name='ck_players_coins_non_negative'),
        )
    if 'achievements' not in tables:
        op.create_table(
            'achievements',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column(
                'title',
                sa.Enum(*ACHIEVEMENT_TITLES, name='achievement_title', native_enum=False, create_constraint=True, length=32),
                nullable=False,
            ),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id'), nullable=False),
            sa.UniqueConstraint('player_id', 'title', name='uq_achievements_player_title'),
        )
        op.create_index('ix_achievements_player_id', 'achievements', ['player_id'])


def downgrade():
    op.drop_index('ix_achievements_player_id', table_name='achievements')
    op.drop_table('achievements')
    op.drop_table('players')

"""Initial schema for games, roles, quests and quest participants

Revision ID: 001
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('games',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('game_id', sa.String(length=36), nullable=False),
        sa.Column('winner', sa.String(length=10), nullable=False),
        sa.Column('victory_type', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('game_id')
    )

    op.create_table('player_roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('game_pk', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['game_pk'], ['games.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('game_pk', 'name', name='uq_player_roles_game_name')
    )
    op.create_index('idx_player_roles_name', 'player_roles', ['name'])

    op.create_table('quests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('game_pk', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('fails', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['game_pk'], ['games.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('game_pk', 'position', name='uq_quests_game_position')
    )

    op.create_table('quest_participants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quest_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['quest_id'], ['quests.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_quest_participants_quest', 'quest_participants', ['quest_id'])


def downgrade() -> None:
    op.drop_index('idx_quest_participants_quest', table_name='quest_participants')
    op.drop_table('quest_participants')
    op.drop_table('quests')
    op.drop_index('idx_player_roles_name', table_name='player_roles')
    op.drop_table('player_roles')
    op.drop_table('games')

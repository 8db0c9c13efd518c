"""create user, question, game_session and question_record tables

Revision ID: 4c7e1a9b2d10
Revises:
Create Date: 2025-11-03 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c7e1a9b2d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.String(length=32), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=128), nullable=False),
            sa.Column('role', sa.String(length=16), nullable=False, server_default='user'),
            sa.Column('is_blocked', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'question' not in existing_tables:
        op.create_table(
            'question',
            sa.Column('id', sa.String(length=32), primary_key=True),
            sa.Column('question_text', sa.Text(), nullable=False),
            sa.Column('correct_answer', sa.String(length=255), nullable=False),
            sa.Column('incorrect_answers', sa.JSON(), nullable=False),
            sa.Column('category', sa.String(length=64), nullable=False),
            sa.Column('image_ref', sa.String(length=512), nullable=False),
            sa.Column('source_ref', sa.String(length=64), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_question_category', 'question', ['category'])

    if 'game_session' not in existing_tables:
        op.create_table(
            'game_session',
            sa.Column('id', sa.String(length=32), primary_key=True),
            sa.Column('player_id', sa.String(length=64), nullable=False),
            sa.Column('player_display_name', sa.String(length=64), nullable=False),
            sa.Column('category', sa.String(length=64), nullable=False),
            sa.Column('total_questions', sa.Integer(), nullable=False),
            sa.Column('correct_count', sa.Integer(), nullable=False),
            sa.Column('incorrect_count', sa.Integer(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('completed_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_game_session_player_id', 'game_session', ['player_id'])
        op.create_index('ix_game_session_completed_at', 'game_session', ['completed_at'])

    if 'question_record' not in existing_tables:
        op.create_table(
            'question_record',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('session_id', sa.String(length=32), sa.ForeignKey('game_session.id'), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.String(length=32), nullable=False),
            sa.Column('question_text', sa.Text(), nullable=False),
            sa.Column('correct_answer', sa.String(length=255), nullable=False),
            sa.Column('user_answer', sa.Text(), nullable=True),
            sa.Column('is_correct', sa.Boolean(), nullable=False),
            sa.Column('time_spent', sa.Float(), nullable=False),
            sa.Column('timed_out', sa.Boolean(), nullable=False),
            sa.UniqueConstraint('session_id', 'question_id', name='uq_record_session_question'),
            sa.UniqueConstraint('session_id', 'position', name='uq_record_session_position'),
        )
        op.create_index('ix_question_record_session_id', 'question_record', ['session_id'])


def downgrade():
    op.drop_index('ix_question_record_session_id', table_name='question_record')
    op.drop_table('question_record')
    op.drop_index('ix_game_session_completed_at', table_name='game_session')
    op.drop_index('ix_game_session_player_id', table_name='game_session')
    op.drop_table('game_session')
    op.drop_index('ix_question_category', table_name='question')
    op.drop_table('question')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')

"""Create question bank, exam, room and user profile tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Main question bank
    op.create_table(
        'questions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('text', sa.Text, nullable=False),
        sa.Column('options', sa.JSON, nullable=False),
        sa.Column('correct_answer', sa.Integer, nullable=False),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('set', sa.Integer, nullable=True),
        sa.Column('category', sa.String(20), nullable=False, server_default='standard'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_questions_subject_set', 'questions', ['subject', 'set'])
    op.create_index('ix_questions_category', 'questions', ['category'])

    # Imported mock board pool
    op.create_table(
        'mockboard_questions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('position', sa.Integer, nullable=False),
        sa.Column('text', sa.Text, nullable=False),
        sa.Column('options', sa.JSON, nullable=False),
        sa.Column('correct_answer', sa.Integer, nullable=False),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('set', sa.Integer, nullable=True),
        sa.Column('imported_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_mockboard_questions_position', 'mockboard_questions', ['position'])

    op.create_table(
        'exams',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.Text, nullable=False),
        sa.Column('question_ids', sa.JSON, nullable=False),
        sa.Column('duration_minutes', sa.Integer, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'rooms',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('question_ids', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_rooms_name', 'rooms', ['name'])

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='student'),
        sa.Column('lives', sa.Integer, nullable=False, server_default='10'),
        sa.Column('mock_board_score', sa.Float, nullable=True),
        sa.Column('standard_game_scores', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_user_profiles_name', 'user_profiles', ['name'])


def downgrade() -> None:
    op.drop_index('ix_user_profiles_name', table_name='user_profiles')
    op.drop_table('user_profiles')
    op.drop_index('ix_rooms_name', table_name='rooms')
    op.drop_table('rooms')
    op.drop_table('exams')
    op.drop_index('ix_mockboard_questions_position', table_name='mockboard_questions')
    op.drop_table('mockboard_questions')
    op.drop_index('ix_questions_category', table_name='questions')
    op.drop_index('ix_questions_subject_set', table_name='questions')
    op.drop_table('questions')

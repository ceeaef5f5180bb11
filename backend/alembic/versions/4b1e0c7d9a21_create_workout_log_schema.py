"""create workout log schema + seed categories

Revision ID: 4b1e0c7d9a21
Revises:
Create Date: 2025-11-02 19:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e0c7d9a21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False)


def _set_columns():
    return [
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(7, 2), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('duration_seconds', sa.Integer(), nullable=True),
        _timestamps(),
    ]


def upgrade() -> None:
    # 1) catalog
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=60), nullable=False),
        sa.Column('slug', sa.String(length=60), nullable=False, unique=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_by', sa.String(length=64), nullable=True, index=True),
        _timestamps(),
    )

    # 2) daily log: session -> exercises -> sets
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False, index=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('memo', sa.Text(), nullable=True),
        _timestamps(),
        sa.UniqueConstraint('user_id', 'date', name='uq_workout_sessions_user_date'),
    )
    op.create_table(
        'session_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id'), nullable=False, index=True),
        sa.Column('order_num', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('memo', sa.Text(), nullable=True),
        _timestamps(),
    )
    op.create_table(
        'exercise_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_exercise_id', sa.Integer(), sa.ForeignKey('session_exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        *_set_columns(),
    )

    # 3) routines mirror the daily log
    op.create_table(
        'routines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        _timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_table(
        'routine_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_id', sa.Integer(), sa.ForeignKey('routines.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id'), nullable=False, index=True),
        sa.Column('order_num', sa.Integer(), nullable=False, server_default='1'),
        _timestamps(),
    )
    op.create_table(
        'routine_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_exercise_id', sa.Integer(), sa.ForeignKey('routine_exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        *_set_columns(),
    )

    # 4) goals
    op.create_table(
        'user_goals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False, index=True),
        sa.Column('goal_type', sa.String(length=40), nullable=False, server_default='weekly_workouts'),
        sa.Column('target_value', sa.Integer(), nullable=False, server_default='5'),
        _timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('user_id', 'goal_type', name='uq_user_goals_user_type'),
    )

    op.execute(
        """
        INSERT INTO categories (name, slug, sort_order)
        VALUES
        ('Chest', 'chest', 1),
        ('Back', 'back', 2),
        ('Legs', 'legs', 3),
        ('Shoulders', 'shoulders', 4),
        ('Arms', 'arms', 5),
        ('Core', 'core', 6),
        ('Cardio', 'cardio', 7)
        """
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('user_goals')
    op.drop_table('routine_sets')
    op.drop_table('routine_exercises')
    op.drop_table('routines')
    op.drop_table('exercise_sets')
    op.drop_table('session_exercises')
    op.drop_table('workout_sessions')
    op.drop_table('exercises')
    op.drop_table('categories')

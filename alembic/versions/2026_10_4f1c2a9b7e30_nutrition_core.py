"""nutrition core tables

Revision ID: 4f1c2a9b7e30
Revises:
Create Date: 2026-10-18 09:12:44.108213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9b7e30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('gender', sa.String(length=10), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('height_cm', sa.Float(), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('activity_level', sa.String(length=20), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein', sa.Float(), nullable=True),
        sa.Column('carbs', sa.Float(), nullable=True),
        sa.Column('fat', sa.Float(), nullable=True),
        sa.Column('timezone', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_user_profiles_id', 'user_profiles', ['id'])
    op.create_index('ix_user_profiles_user_id', 'user_profiles', ['user_id'], unique=True)

    op.create_table(
        'meal_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('plan_date', sa.Date(), nullable=False),
        sa.Column('plan_end_date', sa.Date(), nullable=True),
        sa.Column('meals_per_day', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_meal_plans_id', 'meal_plans', ['id'])
    op.create_index('ix_meal_plans_user_id', 'meal_plans', ['user_id'])
    op.create_index('ix_meal_plans_plan_date', 'meal_plans', ['plan_date'])

    op.create_table(
        'meals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_id', sa.Integer(), sa.ForeignKey('meal_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('meal_name', sa.String(), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein', sa.Float(), nullable=True),
        sa.Column('carbs', sa.Float(), nullable=True),
        sa.Column('fat', sa.Float(), nullable=True),
        sa.Column('prep_time', sa.Integer(), nullable=True),
        sa.Column('ingredients', postgresql.JSONB(), nullable=True, comment='Ordered ingredient lines'),
        sa.Column('instructions', postgresql.JSONB(), nullable=True, comment='Preparation steps'),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('source_url', sa.String(), nullable=True),
    )
    op.create_index('ix_meals_id', 'meals', ['id'])
    op.create_index('ix_meals_meal_plan_id', 'meals', ['meal_plan_id'])

    op.create_table(
        'shopping_lists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_id', sa.Integer(), sa.ForeignKey('meal_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('items', postgresql.JSONB(), nullable=False, comment='[{ name, quantity, measure, category, checked }]'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_shopping_lists_id', 'shopping_lists', ['id'])
    op.create_index('ix_shopping_lists_meal_plan_id', 'shopping_lists', ['meal_plan_id'])

    op.create_table(
        'nutrition_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('food_name', sa.String(length=100), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('protein', sa.Float(), nullable=True),
        sa.Column('carbs', sa.Float(), nullable=True),
        sa.Column('fat', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_nutrition_logs_id', 'nutrition_logs', ['id'])
    op.create_index('ix_nutrition_logs_user_id', 'nutrition_logs', ['user_id'])
    op.create_index('ix_nutrition_logs_date', 'nutrition_logs', ['date'])


def downgrade() -> None:
    op.drop_table('nutrition_logs')
    op.drop_table('shopping_lists')
    op.drop_table('meals')
    op.drop_table('meal_plans')
    op.drop_table('user_profiles')

"""create users and food_logs tables

Revision ID: 3c1f9e7a2b40
Revises:
Create Date: 2026-10-18 10:12:07.412903

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f9e7a2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'food_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('food_name', sa.String(length=255), nullable=False),
        sa.Column('calories', sa.Float(), nullable=False),
        sa.Column('protein', sa.Float(), nullable=False, server_default='0'),
        sa.Column('carbs', sa.Float(), nullable=False, server_default='0'),
        sa.Column('fats', sa.Float(), nullable=False, server_default='0'),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('meal_type', sa.String(length=20), nullable=False, server_default='Snack'),
        sa.Column('eaten_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    # Day-range queries always filter by owner first
    op.create_index('ix_food_logs_user_eaten', 'food_logs', ['user_id', 'eaten_at'])


def downgrade():
    op.drop_index('ix_food_logs_user_eaten', table_name='food_logs')
    op.drop_table('food_logs')
    op.drop_table('users')

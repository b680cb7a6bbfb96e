"""Create hotel back office tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

This migration creates users, properties with their photo gallery,
restaurant menus with categories, and the TV manager guest records.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create the back office tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=255), nullable=True),
        sa.Column('state', sa.String(length=255), nullable=True),
        sa.Column('zip', sa.String(length=255), nullable=True),
        sa.Column('country', sa.String(length=255), nullable=True),
        sa.Column('latitude', sa.Numeric(precision=10, scale=7), nullable=True),
        sa.Column('longitude', sa.Numeric(precision=10, scale=7), nullable=True),
        sa.Column('star_rating', sa.Integer(), nullable=True),
        sa.Column('total_rooms', sa.Integer(), nullable=True),
        sa.Column(
            'hotel_category',
            sa.Enum('budget', 'mid-range', 'luxury', name='hotel_category', create_constraint=True),
            nullable=True
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_properties_user_id'),
    )
    op.create_index('ix_properties_user_id', 'properties', ['user_id'])

    op.create_table(
        'property_images',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=False),
        sa.Column('caption', sa.String(length=255), nullable=True),
        sa.Column(
            'type',
            sa.Enum('exterior', 'interior', 'room', 'facility', name='property_image_type', create_constraint=True),
            nullable=False,
            server_default='interior'
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_property_images_property_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_property_images_property_id', 'property_images', ['property_id'])

    op.create_table(
        'restaurant_categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_restaurant_categories_name'),
    )

    op.create_table(
        'restaurant_menu_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('enabled', 'disabled', name='menu_item_status', create_constraint=True),
            nullable=False,
            server_default='enabled'
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_restaurant_menu_items_property_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_restaurant_menu_items_property_id', 'restaurant_menu_items', ['property_id'])

    op.create_table(
        'restaurant_category_menu_items',
        sa.Column('restaurant_category_id', sa.Integer(), nullable=False),
        sa.Column('restaurant_menu_item_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('restaurant_category_id', 'restaurant_menu_item_id'),
        sa.ForeignKeyConstraint(
            ['restaurant_category_id'],
            ['restaurant_categories.id'],
            name='fk_category_menu_items_category_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['restaurant_menu_item_id'],
            ['restaurant_menu_items.id'],
            name='fk_category_menu_items_menu_item_id',
            ondelete='CASCADE'
        ),
    )

    op.create_table(
        'tv_managers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('guest_name', sa.String(length=255), nullable=False),
        sa.Column('area_name', sa.String(length=255), nullable=True),
        sa.Column('room_number', sa.String(length=50), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('check_in_date', sa.Date(), nullable=True),
        sa.Column('check_out_date', sa.Date(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('checked_in', 'checked_out', name='guest_status', create_constraint=True),
            nullable=False,
            server_default='checked_in'
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_tv_managers_property_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_tv_managers_property_id', 'tv_managers', ['property_id'])


def downgrade() -> None:
    """Drop the back office tables."""
    op.drop_index('ix_tv_managers_property_id', table_name='tv_managers')
    op.drop_table('tv_managers')
    op.drop_table('restaurant_category_menu_items')
    op.drop_index('ix_restaurant_menu_items_property_id', table_name='restaurant_menu_items')
    op.drop_table('restaurant_menu_items')
    op.drop_table('restaurant_categories')
    op.drop_index('ix_property_images_property_id', table_name='property_images')
    op.drop_table('property_images')
    op.drop_index('ix_properties_user_id', table_name='properties')
    op.drop_table('properties')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    # Drop the named enum types (no-op on backends without them)
    bind = op.get_bind()
    for enum_name in ('guest_status', 'menu_item_status', 'property_image_type', 'hotel_category'):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)

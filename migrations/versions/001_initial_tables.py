"""Create Botanical Buddy tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

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
    """Create user, plant, care log, weather and subscription tables"""

    # 1. Create users table
    op.create_table('users',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('subscription_tier', sa.String(20), nullable=False, server_default='Free'),
        sa.Column('billing_customer_id', sa.String(255), nullable=True),
        sa.Column('email_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2. Create subscriptions table
    op.create_table('subscriptions',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('tier', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('billing_subscription_id', sa.String(255), nullable=True),
        sa.Column('current_period_start', sa.DateTime(timezone=True), nullable=True),
        sa.Column('current_period_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancel_at_period_end', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_subscriptions'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE',
                                name='fk_subscriptions_user_id_users'),
        sa.CheckConstraint("status IN ('active', 'cancelled', 'past_due')",
                           name='ck_subscriptions_status'),
    )
    op.create_index('ix_subscriptions_user_id', 'subscriptions', ['user_id'])

    # 3. Create addresses table
    op.create_table('addresses',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('address_line1', sa.String(255), nullable=False),
        sa.Column('address_line2', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('postal_code', sa.String(20), nullable=True),
        sa.Column('latitude', sa.Numeric(10, 8), nullable=True),
        sa.Column('longitude', sa.Numeric(11, 8), nullable=True),
        sa.Column('timezone', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_addresses'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE',
                                name='fk_addresses_user_id_users'),
    )
    op.create_index('ix_addresses_user_id', 'addresses', ['user_id'])

    # 4. Create user_plants table
    op.create_table('user_plants',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('address_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('trefle_plant_id', sa.Integer(), nullable=True),
        sa.Column('common_name', sa.String(255), nullable=True),
        sa.Column('scientific_name', sa.String(255), nullable=True),
        sa.Column('nickname', sa.String(100), nullable=True),
        sa.Column('date_planted', sa.Date(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_user_plants'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE',
                                name='fk_user_plants_user_id_users'),
        sa.ForeignKeyConstraint(['address_id'], ['addresses.id'], ondelete='SET NULL',
                                name='fk_user_plants_address_id_addresses'),
    )
    op.create_index('ix_user_plants_user_id', 'user_plants', ['user_id'])
    op.create_index('ix_user_plants_address_id', 'user_plants', ['address_id'])

    # 5. Create plant_care_logs table
    op.create_table('plant_care_logs',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('user_plant_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('care_type', sa.String(50), nullable=False),
        sa.Column('date_time', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('amount', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_plant_care_logs'),
        sa.ForeignKeyConstraint(['user_plant_id'], ['user_plants.id'], ondelete='CASCADE',
                                name='fk_plant_care_logs_user_plant_id_user_plants'),
    )
    op.create_index('ix_plant_care_logs_user_plant_id', 'plant_care_logs', ['user_plant_id'])
    op.create_index('ix_plant_care_logs_date_time', 'plant_care_logs', ['date_time'])

    # 6. Create weather_data table
    op.create_table('weather_data',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('address_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('temperature', sa.Numeric(5, 2), nullable=True),
        sa.Column('humidity', sa.Integer(), nullable=True),
        sa.Column('precipitation', sa.Numeric(5, 2), nullable=True),
        sa.Column('conditions', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_weather_data'),
        sa.ForeignKeyConstraint(['address_id'], ['addresses.id'], ondelete='CASCADE',
                                name='fk_weather_data_address_id_addresses'),
        # Concurrent first fetches of the day rely on this for ON CONFLICT DO NOTHING
        sa.UniqueConstraint('address_id', 'date', name='uq_weather_data_address_id_date'),
    )
    op.create_index('ix_weather_data_address_id', 'weather_data', ['address_id'])


def downgrade() -> None:
    """Drop all Botanical Buddy tables"""

    op.drop_table('weather_data')
    op.drop_table('plant_care_logs')
    op.drop_table('user_plants')
    op.drop_table('addresses')
    op.drop_table('subscriptions')
    op.drop_table('users')

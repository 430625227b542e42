"""Create initial tables

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

MYSQL_OPTIONS = {
    'mysql_engine': 'InnoDB',
    'mysql_charset': 'utf8mb4',
    'mysql_collate': 'utf8mb4_unicode_ci',
}


def upgrade():
    # Create companies table
    op.create_table(
        'companies',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('business_hours', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.String(500), nullable=True),
        sa.Column('images', sa.Text(), nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('subscription_plan', sa.String(50), nullable=True),
        sa.Column('subscription_status', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_companies_id'), 'companies', ['id'], unique=False)

    # Create services table
    op.create_table(
        'services',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('company_id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_services_id'), 'services', ['id'], unique=False)
    op.create_index(op.f('ix_services_company_id'), 'services', ['company_id'], unique=False)

    # Create employees table
    op.create_table(
        'employees',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('company_id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('position', sa.String(100), nullable=True),
        sa.Column('specialties', sa.Text(), nullable=True),
        sa.Column('working_hours', sa.Text(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(255), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('company_id', 'email', name='unique_company_email'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_employees_id'), 'employees', ['id'], unique=False)
    op.create_index(op.f('ix_employees_company_id'), 'employees', ['company_id'], unique=False)

    # Create pet_owners table
    op.create_table(
        'pet_owners',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(255), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(50), nullable=True),
        sa.Column('emergency_contact_relationship', sa.String(100), nullable=True),
        sa.Column('preferences', sa.Text(), nullable=True),
        sa.Column('last_active_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_pet_owners_id'), 'pet_owners', ['id'], unique=False)

    # Create pets table
    op.create_table(
        'pets',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('owner_id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(100), nullable=False),
        sa.Column('breed', sa.String(100), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('weight', sa.Numeric(5, 2), nullable=True),
        sa.Column('gender', sa.String(20), nullable=True),
        sa.Column('color', sa.String(100), nullable=True),
        sa.Column('microchip_id', sa.String(100), nullable=True),
        sa.Column('photos', sa.Text(), nullable=True),
        sa.Column('medical_info', sa.Text(), nullable=True),
        sa.Column('behavior_notes', sa.Text(), nullable=True),
        sa.Column('special_needs', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['pet_owners.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_pets_id'), 'pets', ['id'], unique=False)
    op.create_index(op.f('ix_pets_owner_id'), 'pets', ['owner_id'], unique=False)

    # Create bookings table
    op.create_table(
        'bookings',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('company_id', sa.String(255), nullable=False),
        sa.Column('service_id', sa.String(255), nullable=False),
        sa.Column('pet_owner_id', sa.String(255), nullable=False),
        sa.Column('pet_id', sa.String(255), nullable=False),
        sa.Column('employee_id', sa.String(255), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['pet_owner_id'], ['pet_owners.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['pet_id'], ['pets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_bookings_id'), 'bookings', ['id'], unique=False)
    op.create_index(op.f('ix_bookings_company_id'), 'bookings', ['company_id'], unique=False)
    op.create_index(op.f('ix_bookings_pet_owner_id'), 'bookings', ['pet_owner_id'], unique=False)
    op.create_index(op.f('ix_bookings_employee_id'), 'bookings', ['employee_id'], unique=False)
    op.create_index(op.f('ix_bookings_date'), 'bookings', ['date'], unique=False)

    # Create reviews table
    op.create_table(
        'reviews',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('company_id', sa.String(255), nullable=False),
        sa.Column('pet_owner_id', sa.String(255), nullable=False),
        sa.Column('booking_id', sa.String(255), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['pet_owner_id'], ['pet_owners.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_id'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_reviews_id'), 'reviews', ['id'], unique=False)
    op.create_index(op.f('ix_reviews_company_id'), 'reviews', ['company_id'], unique=False)

    # Create waitlist table
    op.create_table(
        'waitlist',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('status', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', 'type', name='unique_email_type'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_waitlist_id'), 'waitlist', ['id'], unique=False)
    op.create_index(op.f('ix_waitlist_created_at'), 'waitlist', ['created_at'], unique=False)

    # Create currencies table
    op.create_table(
        'currencies',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('code', sa.String(3), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('symbol', sa.String(10), nullable=False),
        sa.Column('flag_emoji', sa.String(10), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_base', sa.Boolean(), nullable=False),
        sa.Column('exchange_rate', sa.Float(), nullable=False),
        sa.Column('last_updated', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
        **MYSQL_OPTIONS
    )
    op.create_index(op.f('ix_currencies_id'), 'currencies', ['id'], unique=False)


def downgrade():
    op.drop_table('currencies')
    op.drop_table('waitlist')
    op.drop_table('reviews')
    op.drop_table('bookings')
    op.drop_table('pets')
    op.drop_table('pet_owners')
    op.drop_table('employees')
    op.drop_table('services')
    op.drop_table('companies')

"""Weddings, guests and gift payments

Revision ID: 001_wedding_schema
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001_wedding_schema'
down_revision = None

# Enum columns store member names, as SQLModel maps Python enums
wedding_status = sa.Enum('DRAFT', 'PENDING_PAYMENT', 'LIVE', name='weddingstatus')
gift_mode = sa.Enum('WISHLIST', 'GIFTS', name='giftmode')
platform_payment_status = sa.Enum('UNPAID', 'PAID', 'NOT_APPLICABLE', name='platformpaymentstatus')
rsvp_status = sa.Enum('PENDING', 'CONFIRMED', 'DECLINED', name='rsvpstatus')
gift_payment_status = sa.Enum('PENDING', 'SUCCEEDED', 'FAILED', name='giftpaymentstatus')


def upgrade():
    # Create weddings table
    op.create_table(
        'weddings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('status', wedding_status, nullable=False, server_default='DRAFT'),
        sa.Column('template_id', sa.String(), nullable=False),
        sa.Column('template_version', sa.String(), nullable=False),
        sa.Column('enabled_sections', sa.JSON(), nullable=False),
        sa.Column('section_content', sa.JSON(), nullable=False),
        sa.Column('theme', sa.JSON(), nullable=False),
        sa.Column('couple_emails', sa.JSON(), nullable=False),
        sa.Column('navbar_logo_light_url', sa.String(), nullable=True),
        sa.Column('navbar_logo_dark_url', sa.String(), nullable=True),
        sa.Column('wedding_date', sa.String(10), nullable=True),
        sa.Column('gift_mode', gift_mode, nullable=False, server_default='WISHLIST'),
        sa.Column('payment_status', platform_payment_status, nullable=False, server_default='UNPAID'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_weddings_name', 'weddings', ['name'])
    op.create_index('ix_weddings_slug', 'weddings', ['slug'], unique=True)
    op.create_index('ix_weddings_status', 'weddings', ['status'])

    # Create guests table
    op.create_table(
        'guests',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('wedding_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('weddings.id'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('rsvp_status', rsvp_status, nullable=False, server_default='PENDING'),
        sa.Column('party_size', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('dietary_notes', sa.String(1000), nullable=True),
        sa.Column('whatsapp_consent', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('wedding_id', 'phone', name='uq_guest_wedding_phone'),
    )
    op.create_index('ix_guests_wedding_id', 'guests', ['wedding_id'])
    op.create_index('ix_guests_phone', 'guests', ['phone'])
    op.create_index('ix_guests_rsvp_status', 'guests', ['rsvp_status'])

    # Create gift payments table
    op.create_table(
        'gift_payments',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('wedding_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('weddings.id'), nullable=False),
        sa.Column('gift_id', sa.String(100), nullable=False),
        sa.Column('guest_name', sa.String(200), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='USD'),
        sa.Column('provider', sa.String(50), nullable=False, server_default='mercadopago'),
        sa.Column('provider_reference', sa.String(255), nullable=True),
        sa.Column('checkout_url', sa.String(), nullable=True),
        sa.Column('status', gift_payment_status, nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('amount_cents > 0', name='ck_gift_payment_amount_positive'),
    )
    op.create_index('ix_gift_payments_wedding_id', 'gift_payments', ['wedding_id'])
    op.create_index('ix_gift_payments_gift_id', 'gift_payments', ['gift_id'])
    op.create_index('ix_gift_payments_provider_reference', 'gift_payments', ['provider_reference'])
    op.create_index('ix_gift_payments_status', 'gift_payments', ['status'])


def downgrade():
    op.drop_table('gift_payments')
    op.drop_table('guests')
    op.drop_table('weddings')

    bind = op.get_bind()
    for enum in (gift_payment_status, rsvp_status, platform_payment_status, gift_mode, wedding_status):
        enum.drop(bind, checkfirst=True)

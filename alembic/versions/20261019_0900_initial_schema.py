"""Initial vendor compliance schema

Tables added:
- organizations: tenancy boundary and plan tier
- users: organization members keyed by identity-provider subject
- vendors: vendor registry with the single active portal token
- document_types: requirement templates per vendor category
- vendor_documents: uploaded evidence and its review state
- audit_logs: append-only compliance events
- notification_rules: expiry reminder windows

Revision ID: initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = 'initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _organization_fk() -> sa.Column:
    return sa.Column(
        'organization_id',
        sa.String(length=100),
        sa.ForeignKey('organizations.id', ondelete='CASCADE'),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        'organizations',
        sa.Column('id', sa.String(length=100), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('plan', sa.String(length=20), nullable=False, server_default='free'),
        sa.Column('stripe_customer_id', sa.String(length=255), nullable=True),
        sa.Column('stripe_subscription_id', sa.String(length=255), nullable=True),
        sa.Column('subscription_status', sa.String(length=50), nullable=True),
        sa.Column('current_period_end', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=255), primary_key=True),
        _organization_fk(),
        sa.Column('email', sa.String(length=255), nullable=True, unique=True),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('profile_image_url', sa.String(length=500), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False, server_default='read_only'),
        *_timestamps(),
    )
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])

    op.create_table(
        'vendors',
        sa.Column('id', sa.String(length=36), primary_key=True),
        _organization_fk(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('legal_entity_name', sa.String(length=255), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('risk_level', sa.String(length=20), nullable=False, server_default='low'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('primary_contact_name', sa.String(length=255), nullable=True),
        sa.Column('primary_contact_email', sa.String(length=255), nullable=True),
        sa.Column('primary_contact_phone', sa.String(length=50), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('portal_token', sa.String(length=128), nullable=True),
        sa.Column('portal_token_expiry', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_vendors_organization_id', 'vendors', ['organization_id'])
    op.create_index('ix_vendors_name', 'vendors', ['name'])
    op.create_index('ix_vendors_category', 'vendors', ['category'])
    op.create_index('ix_vendors_status', 'vendors', ['status'])
    op.create_index('ix_vendors_primary_contact_email', 'vendors', ['primary_contact_email'])
    op.create_index('ix_vendors_portal_token', 'vendors', ['portal_token'], unique=True)

    op.create_table(
        'document_types',
        sa.Column('id', sa.String(length=36), primary_key=True),
        _organization_fk(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('applicable_categories', sa.JSON(), nullable=False),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('expiry_required', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('default_validity_days', sa.Integer(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_document_types_organization_id', 'document_types', ['organization_id'])
    op.create_index('ix_document_types_name', 'document_types', ['name'])

    op.create_table(
        'vendor_documents',
        sa.Column('id', sa.String(length=36), primary_key=True),
        _organization_fk(),
        sa.Column('vendor_id', sa.String(length=36), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('document_type_id', sa.String(length=36), sa.ForeignKey('document_types.id'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),

        # File storage reference
        sa.Column('file_name', sa.String(length=255), nullable=True),
        sa.Column('file_path', sa.String(length=500), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),

        sa.Column('issue_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expiry_date', sa.DateTime(timezone=True), nullable=True),

        # Upload
        sa.Column('uploaded_by', sa.String(length=255), nullable=True),
        sa.Column('uploader_type', sa.String(length=20), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=True),

        # Review
        sa.Column('approved_by', sa.String(length=255), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_by', sa.String(length=255), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_vendor_documents_organization_id', 'vendor_documents', ['organization_id'])
    op.create_index('ix_vendor_documents_vendor_id', 'vendor_documents', ['vendor_id'])
    op.create_index('ix_vendor_documents_document_type_id', 'vendor_documents', ['document_type_id'])
    op.create_index('ix_vendor_documents_status', 'vendor_documents', ['status'])
    op.create_index('ix_vendor_documents_expiry_date', 'vendor_documents', ['expiry_date'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.String(length=36), primary_key=True),
        _organization_fk(),
        sa.Column('vendor_id', sa.String(length=36), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=True),
        sa.Column('vendor_document_id', sa.String(length=36), nullable=True),
        sa.Column('actor_id', sa.String(length=255), nullable=True),
        sa.Column('actor_type', sa.String(length=20), nullable=False),
        sa.Column('action_type', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_audit_logs_organization_id', 'audit_logs', ['organization_id'])
    op.create_index('ix_audit_logs_vendor_id', 'audit_logs', ['vendor_id'])
    op.create_index('ix_audit_logs_vendor_document_id', 'audit_logs', ['vendor_document_id'])
    op.create_index('ix_audit_logs_actor_id', 'audit_logs', ['actor_id'])
    op.create_index('ix_audit_logs_action_type', 'audit_logs', ['action_type'])
    op.create_index('ix_audit_logs_created_at', 'audit_logs', ['created_at'])

    op.create_table(
        'notification_rules',
        sa.Column('id', sa.String(length=36), primary_key=True),
        _organization_fk(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('days_before', sa.Integer(), nullable=False),
        sa.Column('notify_vendor', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notify_internal', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('internal_recipients', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_notification_rules_organization_id', 'notification_rules', ['organization_id'])


def downgrade() -> None:
    op.drop_table('notification_rules')
    op.drop_table('audit_logs')
    op.drop_table('vendor_documents')
    op.drop_table('document_types')
    op.drop_table('vendors')
    op.drop_table('users')
    op.drop_table('organizations')

"""Create invoices, invoice_items and audit_logs tables

Revision ID: 20261018_000002
Revises: 20261018_000001
Create Date: 2026-10-18

Invoices carry their public id, content fingerprint and revocation
fields. The revocation_consistency check keeps revoked_* set exactly
when status is REVOKED.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261018_000002'
down_revision: Union[str, None] = '20261018_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the invoices, invoice_items and audit_logs tables."""
    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('public_id', sa.String(length=36), nullable=False),
        sa.Column('issuer_id', sa.Integer(), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('invoice_number', sa.String(length=64), nullable=False),
        sa.Column('issue_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('subtotal', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('tax', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('client_name', sa.String(length=255), nullable=True),
        sa.Column('content_fingerprint', sa.String(length=64), nullable=True),
        sa.Column(
            'status',
            sa.Enum('ACTIVE', 'REVOKED', name='invoice_status', create_constraint=True),
            nullable=False,
            server_default='ACTIVE'
        ),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.Column('revoked_reason', sa.String(length=500), nullable=True),
        sa.Column('revoked_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_invoices'),
        sa.ForeignKeyConstraint(
            ['issuer_id'],
            ['users.id'],
            name='fk_invoices_issuer_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['client_id'],
            ['clients.id'],
            name='fk_invoices_client_id',
            ondelete='SET NULL'
        ),
        sa.ForeignKeyConstraint(
            ['revoked_by'],
            ['users.id'],
            name='fk_invoices_revoked_by',
        ),
        sa.CheckConstraint(
            "(status = 'ACTIVE' AND revoked_at IS NULL AND revoked_reason IS NULL AND revoked_by IS NULL)"
            " OR "
            "(status = 'REVOKED' AND revoked_at IS NOT NULL AND revoked_reason IS NOT NULL AND revoked_by IS NOT NULL)",
            name='ck_invoices_revocation_consistency',
        ),
    )

    # Create indexes for common queries
    op.create_index('ix_invoices_public_id', 'invoices', ['public_id'], unique=True)
    op.create_index('ix_invoices_issuer_id', 'invoices', ['issuer_id'])
    op.create_index('ix_invoices_client_id', 'invoices', ['client_id'])
    op.create_index('ix_invoices_status', 'invoices', ['status'])

    op.create_table(
        'invoice_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('product', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_invoice_items'),
        sa.ForeignKeyConstraint(
            ['invoice_id'],
            ['invoices.id'],
            name='fk_invoice_items_invoice_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_invoice_items_invoice_id', 'invoice_items', ['invoice_id'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('actor_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=64), nullable=False),
        sa.Column('entity', sa.String(length=64), nullable=True),
        sa.Column('entity_ref', sa.String(length=64), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_audit_logs'),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], name='fk_audit_logs_actor_id'),
    )
    op.create_index('ix_audit_logs_actor_id', 'audit_logs', ['actor_id'])
    op.create_index('ix_audit_logs_entity_ref', 'audit_logs', ['entity_ref'])


def downgrade() -> None:
    """Drop the invoices, invoice_items and audit_logs tables."""
    op.drop_index('ix_audit_logs_entity_ref', table_name='audit_logs')
    op.drop_index('ix_audit_logs_actor_id', table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_index('ix_invoice_items_invoice_id', table_name='invoice_items')
    op.drop_table('invoice_items')
    op.drop_index('ix_invoices_status', table_name='invoices')
    op.drop_index('ix_invoices_client_id', table_name='invoices')
    op.drop_index('ix_invoices_issuer_id', table_name='invoices')
    op.drop_index('ix_invoices_public_id', table_name='invoices')
    op.drop_table('invoices')

    # Drop the enum type (PostgreSQL)
    sa.Enum(name='invoice_status').drop(op.get_bind(), checkfirst=True)

# models/invoice.py
import enum
from sqlalchemy import (
     CheckConstraint,
     Column,
     Date,
     DateTime,
     Enum,
     ForeignKey,
     Integer,
     Numeric,
     String,
     func,
)
from sqlalchemy.orm import relationship
from .base import Base


class InvoiceStatus(str, enum.Enum):
     """Lifecycle status of an issued invoice. REVOKED is terminal."""
     ACTIVE = "ACTIVE"
     REVOKED = "REVOKED"


class Invoice(Base):
     """
     Invoice model - an issued invoice bound to a tamper-evident identity.

     The content columns (number, dates, currency, amounts, client snapshot
     and line items) are covered by ``content_fingerprint``, which is
     written once at creation and never recomputed in place. Status and
     the revocation columns are metadata and stay outside the fingerprint.
     """
     __table_args__ = (
          CheckConstraint(
               "(status = 'ACTIVE' AND revoked_at IS NULL AND revoked_reason IS NULL AND revoked_by IS NULL)"
               " OR "
               "(status = 'REVOKED' AND revoked_at IS NOT NULL AND revoked_reason IS NOT NULL AND revoked_by IS NOT NULL)",
               name="revocation_consistency",
          ),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     public_id = Column(String(36), nullable=False, unique=True, index=True)

     # Foreign keys
     issuer_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     client_id = Column(
          Integer,
          ForeignKey("clients.id", ondelete="SET NULL"),
          nullable=True,
          index=True
     )

     # Fingerprinted content
     invoice_number = Column(String(64), nullable=False)
     issue_date = Column(Date, nullable=False)
     due_date = Column(Date, nullable=True)
     currency = Column(String(3), nullable=False)
     subtotal = Column(Numeric(12, 2), nullable=False)
     tax = Column(Numeric(12, 2), nullable=False, default=0)
     total_amount = Column(Numeric(12, 2), nullable=False)
     client_name = Column(String(255), nullable=True)  # snapshot at issuance

     content_fingerprint = Column(String(64), nullable=True)  # SHA-256 hex

     status = Column(
          Enum(InvoiceStatus, name="invoice_status", create_constraint=True),
          default=InvoiceStatus.ACTIVE,
          nullable=False,
          index=True
     )

     # Revocation audit fields (all set iff status is REVOKED)
     revoked_at = Column(DateTime, nullable=True)
     revoked_reason = Column(String(500), nullable=True)
     revoked_by = Column(Integer, ForeignKey("users.id"), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     issuer = relationship("User", back_populates="invoices", foreign_keys=[issuer_id])
     client = relationship("Client", back_populates="invoices")
     items = relationship(
          "InvoiceItem",
          back_populates="invoice",
          cascade="all, delete-orphan",
          order_by="InvoiceItem.id"
     )

     def __repr__(self):
          return f"<Invoice(id={self.id}, public_id='{self.public_id}', status='{self.status.value}')>"

     @property
     def is_revoked(self) -> bool:
          return self.status == InvoiceStatus.REVOKED


class InvoiceItem(Base):
     """Line item of an invoice. Part of the fingerprinted content."""

     id = Column(Integer, primary_key=True, autoincrement=True)
     invoice_id = Column(
          Integer,
          ForeignKey("invoices.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     product = Column(String(255), nullable=False)
     quantity = Column(Integer, nullable=False)
     unit_price = Column(Numeric(12, 2), nullable=False)

     invoice = relationship("Invoice", back_populates="items")

     def __repr__(self):
          return f"<InvoiceItem(id={self.id}, product='{self.product}', quantity={self.quantity})>"

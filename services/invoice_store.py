# services/invoice_store.py
"""
Invoice Record Store - SQLAlchemy-backed storage for issued invoices.

Lookups for the public verification path go through ``get_by_public_id``
only; ``get_by_id`` exists for internal callers.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload, selectinload

from models import Invoice
from models.invoice import InvoiceStatus
from services.identity_service import normalize_public_id


@dataclass(frozen=True)
class Revocation:
     """Audit record written when an invoice is revoked."""
     reason: str
     revoked_at: datetime
     revoked_by: int


class InvoiceStore:
     """Record store for invoices, bound to one session."""

     def __init__(self, db: Session):
          self.db = db

     def get_by_public_id(self, public_id: str) -> Optional[Invoice]:
          """
          Load an invoice by public id, re-reading the row from the database.

          Returns None for unknown and malformed ids alike.
          """
          normalized = normalize_public_id(public_id)
          if normalized is None:
               return None
          stmt = (
               select(Invoice)
               .options(selectinload(Invoice.items), joinedload(Invoice.issuer))
               .where(Invoice.public_id == normalized)
               .execution_options(populate_existing=True)
          )
          return self.db.execute(stmt).unique().scalars().first()

     def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
          return self.db.get(Invoice, invoice_id)

     def create(self, invoice: Invoice) -> Invoice:
          """Add a new invoice with its items; flushes to assign the internal id."""
          self.db.add(invoice)
          self.db.flush()
          return invoice

     def compare_and_set_revoked(
          self,
          public_id: str,
          expected_status: InvoiceStatus,
          revocation: Revocation,
     ) -> bool:
          """
          Atomically move an invoice from ``expected_status`` to REVOKED.

          Issued as a single conditional UPDATE, so of two concurrent
          callers exactly one sees a matching row.

          Returns:
               True if this call performed the transition.
          """
          stmt = (
               update(Invoice)
               .where(
                    Invoice.public_id == public_id,
                    Invoice.status == expected_status,
               )
               .values(
                    status=InvoiceStatus.REVOKED,
                    revoked_at=revocation.revoked_at,
                    revoked_reason=revocation.reason,
                    revoked_by=revocation.revoked_by,
               )
               .execution_options(synchronize_session=False)
          )
          result = self.db.execute(stmt)
          return result.rowcount == 1

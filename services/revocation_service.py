# services/revocation_service.py
"""
Revocation Service - ACTIVE -> REVOKED transition for issued invoices.

Only the issuer may revoke, a non-empty reason is required, and the
transition is terminal. The content fingerprint is never touched, so a
revoked invoice can still be told apart from a tampered one.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.invoice import InvoiceStatus
from services.audit_service import INVOICE_REVOKED, log_audit
from services.exceptions import (
     AlreadyRevoked,
     Forbidden,
     InvalidArgument,
     InvoiceNotFound,
     StoreUnavailable,
)
from services.invoice_store import InvoiceStore, Revocation
from utils.clock import SystemClock, get_clock

logger = logging.getLogger(__name__)

MAX_REASON_LENGTH = 500


def revoke_invoice(
     db: Session,
     public_id: str,
     requester_id: int,
     reason: str,
     clock: SystemClock = None,
) -> Revocation:
     """
     Revoke an invoice on behalf of its issuer.

     Args:
          db: SQLAlchemy database session
          public_id: Public identifier of the invoice
          requester_id: Identity of the caller, supplied by the auth layer
          reason: Why the invoice is revoked (required)
          clock: Source of the revocation timestamp

     Returns:
          The revocation record that was written

     Raises:
          InvoiceNotFound: Unknown or malformed public id
          Forbidden: Caller is not the issuer
          InvalidArgument: Reason is blank or too long
          AlreadyRevoked: Invoice is already revoked, or a concurrent
               revocation won the race
          StoreUnavailable: If the record store cannot be read or written
     """
     clock = clock or get_clock()
     try:
          return _revoke(db, public_id, requester_id, reason, clock)
     except SQLAlchemyError as exc:
          db.rollback()
          logger.exception("Revocation of invoice %s failed", public_id)
          raise StoreUnavailable("Revocation is temporarily unavailable") from exc


def _revoke(db: Session, public_id: str, requester_id: int, reason: str, clock: SystemClock) -> Revocation:
     store = InvoiceStore(db)

     invoice = store.get_by_public_id(public_id)
     if invoice is None:
          raise InvoiceNotFound("Invoice not found")

     if invoice.issuer_id != requester_id:
          raise Forbidden("Only the issuer can revoke this invoice")

     reason = (reason or "").strip()
     if not reason:
          raise InvalidArgument("Revocation reason is required")
     if len(reason) > MAX_REASON_LENGTH:
          raise InvalidArgument(f"Revocation reason must be at most {MAX_REASON_LENGTH} characters")

     if invoice.is_revoked:
          raise AlreadyRevoked("Invoice has already been revoked")

     revocation = Revocation(reason=reason, revoked_at=clock.now(), revoked_by=requester_id)
     if not store.compare_and_set_revoked(invoice.public_id, InvoiceStatus.ACTIVE, revocation):
          db.rollback()
          raise AlreadyRevoked("Invoice has already been revoked")

     log_audit(
          db,
          actor_id=requester_id,
          action=INVOICE_REVOKED,
          entity="invoice",
          entity_ref=invoice.public_id,
          payload={"reason": reason, "revoked_at": revocation.revoked_at.isoformat()},
     )
     db.commit()

     logger.info("Invoice %s revoked by user %s", invoice.public_id, requester_id)
     return revocation

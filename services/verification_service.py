# services/verification_service.py
"""
Verification Service - public, read-only authenticity check.

Given a public id:
1. Look the invoice up (unknown and malformed ids are both NOT_FOUND)
2. Recompute the fingerprint from the stored content
3. Mismatch -> MODIFIED, whatever the status
4. Otherwise REVOKED if revoked, else VERIFIED

Nothing is written. A store failure is raised as StoreUnavailable and is
never reported as NOT_FOUND.
"""
import hmac
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Invoice
from services.exceptions import InvalidContent, StoreUnavailable
from services.fingerprint_service import compute_fingerprint, content_from_invoice
from services.invoice_store import InvoiceStore
from utils.clock import SystemClock, get_clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvoiceSummary:
     """Display fields disclosed to whoever holds the public id."""
     issuer_name: Optional[str]
     invoice_number: Optional[str]
     issue_date: Optional[date]
     due_date: Optional[date]
     currency: Optional[str]
     total_amount: Optional[Decimal]


@dataclass(frozen=True)
class Verified:
     invoice: InvoiceSummary
     verified_at: datetime


@dataclass(frozen=True)
class Revoked:
     invoice: InvoiceSummary
     revoked_at: datetime
     revoked_reason: str
     verified_at: datetime


@dataclass(frozen=True)
class Modified:
     invoice: InvoiceSummary
     verified_at: datetime


@dataclass(frozen=True)
class NotFound:
     verified_at: datetime


VerificationOutcome = Union[Verified, Revoked, Modified, NotFound]


def _summarize(invoice: Invoice) -> InvoiceSummary:
     return InvoiceSummary(
          issuer_name=invoice.issuer.display_name if invoice.issuer else None,
          invoice_number=invoice.invoice_number,
          issue_date=invoice.issue_date,
          due_date=invoice.due_date,
          currency=invoice.currency,
          total_amount=invoice.total_amount,
     )


def _content_matches(invoice: Invoice) -> bool:
     """True if the stored content still hashes to the issuance fingerprint."""
     if not invoice.content_fingerprint:
          return False
     try:
          current = compute_fingerprint(content_from_invoice(invoice))
     except InvalidContent:
          # Content no longer fingerprintable, e.g. line items removed
          return False
     return hmac.compare_digest(current, invoice.content_fingerprint)


def verify_invoice(db: Session, public_id: str, clock: SystemClock = None) -> VerificationOutcome:
     """
     Verify an invoice by its public identifier.

     Raises:
          StoreUnavailable: If the record store cannot be read.
     """
     clock = clock or get_clock()
     verified_at = clock.now()

     try:
          invoice = InvoiceStore(db).get_by_public_id(public_id)
          if invoice is None:
               return NotFound(verified_at=verified_at)
          summary = _summarize(invoice)
          matches = _content_matches(invoice)
     except SQLAlchemyError as exc:
          logger.exception("Verification lookup failed")
          raise StoreUnavailable("Verification is temporarily unavailable") from exc

     if not matches:
          logger.warning(
               "Tampered invoice detected: public_id=%s invoice_number=%s status=%s",
               invoice.public_id,
               invoice.invoice_number,
               invoice.status.value,
          )
          return Modified(invoice=summary, verified_at=verified_at)

     if invoice.is_revoked:
          return Revoked(
               invoice=summary,
               revoked_at=invoice.revoked_at,
               revoked_reason=invoice.revoked_reason,
               verified_at=verified_at,
          )

     return Verified(invoice=summary, verified_at=verified_at)

# services/invoice_service.py
"""
Invoice Service - Business logic layer for issuing invoices.

Creation is not complete until the fingerprint is stored alongside the
content: content, fingerprint, public id and the audit row are committed
in one transaction.
"""
import logging
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models import Client, Invoice, InvoiceItem
from models.invoice import InvoiceStatus
from schemas.invoice import InvoiceCreate
from services.audit_service import INVOICE_CREATED, log_audit
from services.exceptions import InvoiceNotFound, StoreUnavailable
from services.fingerprint_service import compute_fingerprint, content_from_invoice
from services.identity_service import allocate_public_id
from services.invoice_store import InvoiceStore
from utils.clock import SystemClock, get_clock

logger = logging.getLogger(__name__)


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def generate_invoice_number(public_id: str, clock: SystemClock) -> str:
          """Default invoice number, e.g. INV-20261018-3F2A9C1B."""
          return f"INV-{clock.now():%Y%m%d}-{public_id[:8].upper()}"

     @staticmethod
     def create_invoice(
          db: Session,
          issuer_id: int,
          data: InvoiceCreate,
          clock: SystemClock = None,
     ) -> Invoice:
          """
          Issue a new invoice.

          Args:
               db: SQLAlchemy database session
               issuer_id: Authenticated caller issuing the invoice
               data: Validated invoice content
               clock: Source of the invoice number date

          Returns:
               Created Invoice object (committed)

          Raises:
               InvoiceNotFound: If the client doesn't exist or belongs to another issuer
               InvalidContent: If fingerprint inputs are missing
               StoreUnavailable: If the record store cannot be read or written
          """
          clock = clock or get_clock()

          try:
               client = db.get(Client, data.client_id)
          except SQLAlchemyError as exc:
               logger.exception("Client lookup failed for issuer %s", issuer_id)
               raise StoreUnavailable("Invoice issuance is temporarily unavailable") from exc
          if client is None or client.issuer_id != issuer_id:
               raise InvoiceNotFound(f"Client with ID {data.client_id} not found")

          public_id = allocate_public_id()
          invoice = Invoice(
               public_id=public_id,
               issuer_id=issuer_id,
               client_id=client.id,
               client_name=client.name,
               invoice_number=data.invoice_number or InvoiceService.generate_invoice_number(public_id, clock),
               issue_date=data.issue_date,
               due_date=data.due_date,
               currency=data.currency,
               subtotal=data.subtotal,
               tax=data.tax,
               total_amount=data.total_amount,
               status=InvoiceStatus.ACTIVE,
               items=[
                    InvoiceItem(product=item.product, quantity=item.quantity, unit_price=item.unit_price)
                    for item in data.items
               ],
          )
          # Same canonical path verification uses
          invoice.content_fingerprint = compute_fingerprint(content_from_invoice(invoice))

          try:
               InvoiceStore(db).create(invoice)
               log_audit(
                    db,
                    actor_id=issuer_id,
                    action=INVOICE_CREATED,
                    entity="invoice",
                    entity_ref=public_id,
                    payload={
                         "invoice_number": invoice.invoice_number,
                         "content_fingerprint": invoice.content_fingerprint,
                    },
               )
               db.commit()
          except SQLAlchemyError as exc:
               db.rollback()
               logger.exception("Failed to store invoice %s", public_id)
               raise StoreUnavailable("Invoice issuance is temporarily unavailable") from exc

          logger.info("Invoice %s issued by user %s", public_id, issuer_id)
          return invoice

     @staticmethod
     def get_issuer_invoice(db: Session, issuer_id: int, public_id: str) -> Invoice:
          """
          Fetch one of the issuer's own invoices.

          Other issuers' invoices are reported as not found.
          """
          invoice = InvoiceStore(db).get_by_public_id(public_id)
          if invoice is None or invoice.issuer_id != issuer_id:
               raise InvoiceNotFound("Invoice not found")
          return invoice

     @staticmethod
     def list_issuer_invoices(
          db: Session,
          issuer_id: int,
          status: Optional[InvoiceStatus] = None,
          page: int = 1,
          page_size: int = 50,
     ) -> tuple[list[Invoice], int]:
          """
          List the issuer's invoices, newest first.

          Returns:
               (invoices for the requested page, total matching count)
          """
          conditions = [Invoice.issuer_id == issuer_id]
          if status is not None:
               conditions.append(Invoice.status == status)

          total = db.execute(select(func.count(Invoice.id)).where(*conditions)).scalar_one()

          offset = (page - 1) * page_size
          stmt = (
               select(Invoice)
               .options(selectinload(Invoice.items))
               .where(*conditions)
               .order_by(Invoice.issue_date.desc(), Invoice.id.desc())
               .offset(offset)
               .limit(page_size)
          )
          invoices = list(db.execute(stmt).scalars().all())
          return invoices, total

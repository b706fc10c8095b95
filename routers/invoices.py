# routers/invoices.py
"""
Invoice API routes.

Provides issuance, issuer-scoped listing and revocation.
Access:
- Every route here requires a bearer token
- Issuers only ever see and revoke their own invoices
Public verification lives in routers/verification.py.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from auth import get_caller_id
from database import get_session
from models import Invoice
from models.invoice import InvoiceStatus
from schemas.invoice import (
     InvoiceCreate,
     InvoiceResponse,
     InvoiceListResponse,
     InvoiceStatusEnum,
     RevokeInvoiceRequest,
     RevokeInvoiceResponse,
)
from services.exceptions import InvoiceIntegrityError
from services.identity_service import normalize_public_id
from services.invoice_service import InvoiceService
from services.revocation_service import revoke_invoice
from utils.clock import SystemClock, get_clock
from routers.errors import to_http_exception

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
     "",
     response_model=InvoiceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Issue a new invoice"
)
def create_invoice(
     invoice_data: InvoiceCreate,
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
     clock: SystemClock = Depends(get_clock),
):
     """
     Issue a new invoice for one of the caller's clients.

     - **client_id**: Client being billed (must belong to the caller)
     - **issue_date** / **due_date**: Invoice dates
     - **currency**: 3-letter currency code
     - **subtotal** / **tax** / **total_amount**: Must be consistent with the line items
     - **items**: At least one line item

     The response carries the public id used for verification.
     """
     try:
          invoice = InvoiceService.create_invoice(db, caller_id, invoice_data, clock)
     except InvoiceIntegrityError as exc:
          raise to_http_exception(exc)

     db.refresh(invoice)
     return _build_invoice_response(invoice)


@router.get(
     "",
     response_model=InvoiceListResponse,
     summary="List the caller's invoices"
)
def list_invoices(
     status: Optional[InvoiceStatusEnum] = Query(None, description="Filter by status"),
     page: int = Query(1, ge=1, description="Page number"),
     page_size: int = Query(50, ge=1, le=100, description="Items per page"),
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
):
     """Retrieve a paginated list of invoices issued by the caller."""
     invoices, total = InvoiceService.list_issuer_invoices(
          db,
          caller_id,
          status=InvoiceStatus(status.value) if status else None,
          page=page,
          page_size=page_size,
     )
     return InvoiceListResponse(
          invoices=[_build_invoice_response(inv) for inv in invoices],
          total=total,
          page=page,
          page_size=page_size
     )


@router.get(
     "/{public_id}",
     response_model=InvoiceResponse,
     summary="Get one of the caller's invoices"
)
def get_invoice(
     public_id: str,
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
):
     """Retrieve an invoice by public id, including status and revocation details."""
     try:
          invoice = InvoiceService.get_issuer_invoice(db, caller_id, public_id)
     except InvoiceIntegrityError as exc:
          raise to_http_exception(exc)
     return _build_invoice_response(invoice)


@router.post(
     "/{public_id}/revoke",
     response_model=RevokeInvoiceResponse,
     summary="Revoke an invoice"
)
def revoke(
     public_id: str,
     body: RevokeInvoiceRequest,
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
     clock: SystemClock = Depends(get_clock),
):
     """
     Permanently revoke an invoice. Only its issuer may do this.

     Errors:
     - **404**: unknown invoice
     - **403**: caller is not the issuer
     - **400**: empty reason
     - **409**: already revoked
     """
     try:
          revocation = revoke_invoice(db, public_id, caller_id, body.reason, clock)
     except InvoiceIntegrityError as exc:
          raise to_http_exception(exc)

     return RevokeInvoiceResponse(
          public_id=normalize_public_id(public_id),
          revoked_at=revocation.revoked_at,
     )


def _build_invoice_response(invoice: Invoice) -> InvoiceResponse:
     """
     Helper function to build InvoiceResponse from an invoice row.
     """
     return InvoiceResponse.model_validate(invoice)

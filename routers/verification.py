# routers/verification.py
"""
Public invoice verification routes.

No authentication: whoever holds the public id (QR code or link) may
check the invoice. Responses only carry display fields.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from schemas.verification import VerificationResponse
from services.exceptions import StoreUnavailable
from services.verification_formatter import format_verification
from services.verification_service import verify_invoice
from utils.clock import SystemClock, get_clock
from routers.errors import to_http_exception

router = APIRouter(tags=["verification"])


def _verify(db: Session, public_id: str, clock: SystemClock) -> VerificationResponse:
     try:
          outcome = verify_invoice(db, public_id, clock)
     except StoreUnavailable as exc:
          raise to_http_exception(exc)
     return format_verification(outcome)


@router.get(
     "/api/invoices/verify/{public_id}",
     response_model=VerificationResponse,
     response_model_exclude_none=True,
     summary="Verify an invoice by public id"
)
def verify_invoice_by_path(
     public_id: str,
     db: Session = Depends(get_session),
     clock: SystemClock = Depends(get_clock),
):
     """
     Check an invoice's authenticity and current status.

     - **VERIFIED**: content matches the fingerprint recorded at issuance
     - **REVOKED**: issuer revoked the invoice (reason and time included)
     - **MODIFIED**: content changed after issuance; do not trust it
     - **NOT_FOUND**: no such invoice
     """
     return _verify(db, public_id, clock)


@router.get(
     "/api/verify",
     response_model=VerificationResponse,
     response_model_exclude_none=True,
     summary="Verify an invoice by public id (query parameter)"
)
def verify_invoice_by_query(
     public_id: str = Query(..., alias="publicId", description="Public invoice identifier"),
     db: Session = Depends(get_session),
     clock: SystemClock = Depends(get_clock),
):
     """Same as GET /api/invoices/verify/{public_id}, for links that carry the id as a query parameter."""
     return _verify(db, public_id, clock)

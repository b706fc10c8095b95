# services/verification_formatter.py
from schemas.verification import VerificationResponse, VerificationStatus
from services.verification_service import (
     InvoiceSummary,
     Modified,
     NotFound,
     Revoked,
     VerificationOutcome,
     Verified,
)

VERIFIED_MESSAGE = "Invoice is valid and has not been tampered with."
REVOKED_MESSAGE = "This invoice has been revoked by the issuer."
MODIFIED_MESSAGE = "WARNING: Invoice has been modified after issuance. Do not trust this invoice."
MODIFIED_WARNING = (
     "Do not trust this document. Its financial content no longer matches "
     "the fingerprint recorded when it was issued."
)
NOT_FOUND_MESSAGE = "Invoice not found. This may be a fake invoice."


def _invoice_fields(summary: InvoiceSummary) -> dict:
     return {
          "freelancer_name": summary.issuer_name,
          "invoice_number": summary.invoice_number,
          "issue_date": summary.issue_date,
          "due_date": summary.due_date,
          "currency": summary.currency,
          "total_amount": summary.total_amount,
     }


def format_verification(outcome: VerificationOutcome) -> VerificationResponse:
     """Map a verification outcome to the public response contract."""
     if isinstance(outcome, Verified):
          return VerificationResponse(
               status=VerificationStatus.VERIFIED,
               message=VERIFIED_MESSAGE,
               verification_timestamp=outcome.verified_at,
               **_invoice_fields(outcome.invoice),
          )
     if isinstance(outcome, Revoked):
          return VerificationResponse(
               status=VerificationStatus.REVOKED,
               message=REVOKED_MESSAGE,
               revoked_at=outcome.revoked_at,
               revoked_reason=outcome.revoked_reason,
               verification_timestamp=outcome.verified_at,
               **_invoice_fields(outcome.invoice),
          )
     if isinstance(outcome, Modified):
          return VerificationResponse(
               status=VerificationStatus.MODIFIED,
               message=MODIFIED_MESSAGE,
               warning=MODIFIED_WARNING,
               verification_timestamp=outcome.verified_at,
               **_invoice_fields(outcome.invoice),
          )
     if isinstance(outcome, NotFound):
          # Nothing beyond status and a generic message
          return VerificationResponse(
               status=VerificationStatus.NOT_FOUND,
               message=NOT_FOUND_MESSAGE,
               verification_timestamp=outcome.verified_at,
          )
     raise TypeError(f"Unhandled verification outcome: {type(outcome).__name__}")

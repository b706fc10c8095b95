# schemas/verification.py
"""
Public verification contract.

Returned to anyone who scans the QR code or follows the link, so only
display fields are included and NOT_FOUND carries no invoice data.
Serialized in camelCase with null fields omitted.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VerificationStatus(str, Enum):
     VERIFIED = "VERIFIED"   # Hash matches, invoice is ACTIVE
     REVOKED = "REVOKED"     # Invoice was revoked by issuer
     MODIFIED = "MODIFIED"   # Hash mismatch - invoice has been tampered with
     NOT_FOUND = "NOT_FOUND" # Public id unknown or malformed


class VerificationResponse(BaseModel):
     """Response for GET /api/invoices/verify/{public_id}."""
     status: VerificationStatus
     message: str
     warning: Optional[str] = None

     # Invoice details (only if found)
     freelancer_name: Optional[str] = None
     invoice_number: Optional[str] = None
     issue_date: Optional[date] = None
     due_date: Optional[date] = None
     currency: Optional[str] = None
     total_amount: Optional[Decimal] = None

     # Revocation info (only if revoked)
     revoked_at: Optional[datetime] = None
     revoked_reason: Optional[str] = None

     verification_timestamp: datetime

     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "status": "VERIFIED",
                    "message": "Invoice is valid and has not been tampered with.",
                    "freelancerName": "Jane Doe Studio",
                    "invoiceNumber": "INV-20261018-3F2A9C1B",
                    "issueDate": "2026-10-18",
                    "dueDate": "2026-11-17",
                    "currency": "USD",
                    "totalAmount": "1000.00",
                    "verificationTimestamp": "2026-10-18T10:30:00"
               }
          }
     )

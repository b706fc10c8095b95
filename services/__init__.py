# services/__init__.py
from .invoice_service import InvoiceService
from .fingerprint_service import compute_fingerprint, content_from_invoice, FINGERPRINT_VERSION
from .identity_service import allocate_public_id, normalize_public_id
from .invoice_store import InvoiceStore, Revocation
from .revocation_service import revoke_invoice
from .verification_service import verify_invoice
from .verification_formatter import format_verification

__all__ = [
     "InvoiceService",
     "compute_fingerprint",
     "content_from_invoice",
     "FINGERPRINT_VERSION",
     "allocate_public_id",
     "normalize_public_id",
     "InvoiceStore",
     "Revocation",
     "revoke_invoice",
     "verify_invoice",
     "format_verification",
]

# services/exceptions.py
"""
Errors raised by the invoice integrity services.

Each error carries a stable ``code`` so the API layer can surface a
distinct, actionable status instead of a generic failure. A MODIFIED
verification result is not an error and has no exception here.
"""


class InvoiceIntegrityError(Exception):
     """Base class for invoice integrity errors."""
     code = "INVOICE_ERROR"

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class InvalidContent(InvoiceIntegrityError):
     """Fingerprint inputs are missing (amount, currency or line items)."""
     code = "INVALID_CONTENT"


class InvoiceNotFound(InvoiceIntegrityError):
     """Unknown or malformed public identifier."""
     code = "NOT_FOUND"


class Forbidden(InvoiceIntegrityError):
     """Caller is not the issuer of the invoice."""
     code = "FORBIDDEN"


class InvalidArgument(InvoiceIntegrityError):
     """Request argument rejected, e.g. an empty revocation reason."""
     code = "INVALID_ARGUMENT"


class AlreadyRevoked(InvoiceIntegrityError):
     """Invoice was already revoked; revocation is terminal."""
     code = "ALREADY_REVOKED"


class StoreUnavailable(InvoiceIntegrityError):
     """The record store could not be read or written."""
     code = "STORE_UNAVAILABLE"

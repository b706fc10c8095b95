# schemas/__init__.py
from .invoice import (
     InvoiceCreate,
     InvoiceResponse,
     InvoiceListResponse,
     RevokeInvoiceRequest,
     RevokeInvoiceResponse,
)
from .client import ClientCreate, ClientUpdate, ClientResponse
from .verification import VerificationResponse, VerificationStatus

__all__ = [
     "InvoiceCreate",
     "InvoiceResponse",
     "InvoiceListResponse",
     "RevokeInvoiceRequest",
     "RevokeInvoiceResponse",
     "ClientCreate",
     "ClientUpdate",
     "ClientResponse",
     "VerificationResponse",
     "VerificationStatus",
]

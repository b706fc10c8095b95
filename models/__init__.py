# models/__init__.py
from .base import Base
from .user import User
from .client import Client
from .invoice import Invoice, InvoiceItem, InvoiceStatus
from .audit_log import AuditLog

__all__ = [
     "Base",
     "User",
     "Client",
     "Invoice",
     "InvoiceItem",
     "InvoiceStatus",
     "AuditLog",
]

# routers/__init__.py
from .verification import router as verification_router
from .invoices import router as invoices_router
from .clients import router as clients_router

__all__ = [
     "verification_router",
     "invoices_router",
     "clients_router",
]

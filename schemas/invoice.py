# schemas/invoice.py
"""
Pydantic schemas for Invoice API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from enum import Enum

_CENTS = Decimal("0.01")


class InvoiceStatusEnum(str, Enum):
     """Invoice lifecycle status options."""
     ACTIVE = "ACTIVE"
     REVOKED = "REVOKED"


class InvoiceItemCreate(BaseModel):
     """Line item of a new invoice."""
     product: str = Field(..., min_length=1, max_length=255)
     quantity: int = Field(..., gt=0)
     unit_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class InvoiceCreate(BaseModel):
     """Schema for issuing a new invoice. The issuer is the authenticated caller."""
     client_id: int = Field(..., gt=0, description="Client ID (must belong to the issuer)")
     invoice_number: Optional[str] = Field(
          None, min_length=1, max_length=64, description="Generated when omitted"
     )
     issue_date: date = Field(..., description="Issue date")
     due_date: date = Field(..., description="Payment due date")
     currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 code, e.g. USD")
     subtotal: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     tax: Decimal = Field(Decimal("0.00"), ge=0, max_digits=12, decimal_places=2)
     total_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     items: List[InvoiceItemCreate] = Field(default_factory=list)

     @field_validator("currency")
     @classmethod
     def _currency_upper(cls, value: str) -> str:
          value = value.strip().upper()
          if not value.isalpha():
               raise ValueError("currency must be a 3-letter code")
          return value

     @model_validator(mode="after")
     def _check_totals(self) -> "InvoiceCreate":
          if self.due_date < self.issue_date:
               raise ValueError("due_date cannot be before issue_date")
          if self.items:
               line_total = sum((i.unit_price * i.quantity for i in self.items), Decimal("0"))
               if line_total.quantize(_CENTS) != self.subtotal.quantize(_CENTS):
                    raise ValueError("subtotal does not match the sum of line items")
          if (self.subtotal + self.tax).quantize(_CENTS) != self.total_amount.quantize(_CENTS):
               raise ValueError("total_amount must equal subtotal + tax")
          return self

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "client_id": 1,
                    "issue_date": "2026-10-18",
                    "due_date": "2026-11-17",
                    "currency": "USD",
                    "subtotal": 900.00,
                    "tax": 100.00,
                    "total_amount": 1000.00,
                    "items": [
                         {"product": "Logo design", "quantity": 1, "unit_price": 600.00},
                         {"product": "Revisions", "quantity": 3, "unit_price": 100.00}
                    ]
               }
          }
     )


class InvoiceItemResponse(BaseModel):
     product: str
     quantity: int
     unit_price: Decimal

     model_config = ConfigDict(from_attributes=True)


class InvoiceResponse(BaseModel):
     """Schema for invoice response (issuer view)."""
     public_id: str
     invoice_number: str
     issue_date: date
     due_date: Optional[date] = None
     currency: str
     subtotal: Decimal
     tax: Decimal
     total_amount: Decimal
     client_id: Optional[int] = None
     client_name: Optional[str] = None
     items: List[InvoiceItemResponse]
     content_fingerprint: Optional[str] = None
     status: InvoiceStatusEnum
     revoked_at: Optional[datetime] = None
     revoked_reason: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class InvoiceListResponse(BaseModel):
     """Schema for paginated invoice list response."""
     invoices: List[InvoiceResponse]
     total: int
     page: int = 1
     page_size: int = 50


class RevokeInvoiceRequest(BaseModel):
     """Request body for POST /api/invoices/{public_id}/revoke."""
     reason: str = Field(..., description="Why this invoice is being revoked")

     model_config = ConfigDict(
          json_schema_extra={"example": {"reason": "Duplicate of INV-20261018-3F2A9C1B"}}
     )


class RevokeInvoiceResponse(BaseModel):
     """Acknowledgment of a revocation."""
     message: str = "Invoice revoked"
     public_id: str
     status: InvoiceStatusEnum = InvoiceStatusEnum.REVOKED
     revoked_at: datetime

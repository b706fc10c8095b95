# services/fingerprint_service.py
"""
Fingerprint Service - tamper-evident digest of an invoice's content.

At issuance:
1. Build the canonical representation of the content fields
2. Compute its SHA-256 hash and store it with the invoice

Verification recomputes the hash from the stored content through the
same canonical encoding and compares it with the stored value.

Canonical encoding (version 1):
- JSON, keys sorted, compact separators, UTF-8
- strings NFC-normalized and stripped; currency upper-cased
- dates as ISO-8601 (YYYY-MM-DD) or null
- amounts as Decimal quantized to 2 places (ROUND_HALF_UP), fixed-point text
- line items sorted by (product, quantity, unit_price)

Status, revocation and timestamps are not part of the content. The client
is covered through the name snapshot taken at issuance, not the live
client reference, which may be cleared when the client is deleted.
"""
import hashlib
import json
import unicodedata
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Sequence, Tuple

from models import Invoice
from services.exceptions import InvalidContent

FINGERPRINT_VERSION = 1

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class LineItemContent:
     product: Optional[str]
     quantity: Optional[int]
     unit_price: Optional[Decimal]


@dataclass(frozen=True)
class InvoiceContent:
     """Fingerprint-covered fields of an invoice."""
     invoice_number: Optional[str]
     issue_date: Optional[date]
     due_date: Optional[date]
     currency: Optional[str]
     subtotal: Optional[Decimal]
     tax: Optional[Decimal]
     total_amount: Optional[Decimal]
     client_name: Optional[str]
     items: Tuple[LineItemContent, ...] = field(default_factory=tuple)


def _normalize_amount(amount, field_name: str) -> str:
     """Normalize amount to canonical string for hashing (2 decimal places)."""
     try:
          value = Decimal(str(amount))
     except (InvalidOperation, ValueError) as exc:
          raise InvalidContent(f"{field_name} is not a valid amount") from exc
     if not value.is_finite():
          raise InvalidContent(f"{field_name} is not a valid amount")
     return format(value.quantize(_CENTS, rounding=ROUND_HALF_UP), "f")


def _normalize_text(value: Optional[str]) -> Optional[str]:
     if value is None:
          return None
     return unicodedata.normalize("NFC", value).strip()


def _normalize_date(value: Optional[date]) -> Optional[str]:
     return value.isoformat() if value is not None else None


def _canonical_items(items: Sequence[LineItemContent]) -> list:
     normalized = []
     for index, item in enumerate(items):
          if item.product is None or item.quantity is None or item.unit_price is None:
               raise InvalidContent(f"Line item {index} is missing product, quantity or unit price")
          normalized.append({
               "product": _normalize_text(item.product),
               "quantity": int(item.quantity),
               "unit_price": _normalize_amount(item.unit_price, "unit_price"),
          })
     # Insertion order is incidental; sort so equal content hashes equally
     normalized.sort(key=lambda i: (i["product"], i["quantity"], Decimal(i["unit_price"])))
     return normalized


def canonicalize(content: InvoiceContent) -> bytes:
     """
     Build the canonical byte representation of invoice content.

     Raises:
          InvalidContent: If total amount, currency or line items are missing.
     """
     if content.total_amount is None:
          raise InvalidContent("Invoice total amount is required")
     currency = _normalize_text(content.currency)
     if not currency:
          raise InvalidContent("Invoice currency is required")
     if not content.items:
          raise InvalidContent("Invoice must have at least one line item")

     payload = {
          "version": FINGERPRINT_VERSION,
          "invoice_number": _normalize_text(content.invoice_number),
          "issue_date": _normalize_date(content.issue_date),
          "due_date": _normalize_date(content.due_date),
          "currency": currency.upper(),
          "subtotal": _normalize_amount(content.subtotal, "subtotal") if content.subtotal is not None else None,
          "tax": _normalize_amount(content.tax, "tax") if content.tax is not None else None,
          "total_amount": _normalize_amount(content.total_amount, "total_amount"),
          "client_name": _normalize_text(content.client_name),
          "items": _canonical_items(content.items),
     }
     return json.dumps(
          payload,
          sort_keys=True,
          separators=(",", ":"),
          ensure_ascii=False,
     ).encode("utf-8")


def compute_fingerprint(content: InvoiceContent) -> str:
     """
     Compute the SHA-256 fingerprint of invoice content.

     Returns 64-char lowercase hex string.
     """
     return hashlib.sha256(canonicalize(content)).hexdigest()


def content_from_invoice(invoice: Invoice) -> InvoiceContent:
     """Read the fingerprint-covered fields from a stored invoice."""
     return InvoiceContent(
          invoice_number=invoice.invoice_number,
          issue_date=invoice.issue_date,
          due_date=invoice.due_date,
          currency=invoice.currency,
          subtotal=invoice.subtotal,
          tax=invoice.tax,
          total_amount=invoice.total_amount,
          client_name=invoice.client_name,
          items=tuple(
               LineItemContent(
                    product=item.product,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
               )
               for item in invoice.items
          ),
     )

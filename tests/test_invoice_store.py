from services.identity_service import allocate_public_id
from services.invoice_store import InvoiceStore


def test_get_by_id_returns_the_stored_invoice(db, issued_invoice):
    invoice = InvoiceStore(db).get_by_id(issued_invoice.id)

    assert invoice.public_id == issued_invoice.public_id
    assert invoice.content_fingerprint == issued_invoice.content_fingerprint


def test_get_by_id_unknown(db, issued_invoice):
    assert InvoiceStore(db).get_by_id(issued_invoice.id + 1000) is None


def test_get_by_public_id_loads_items_and_issuer(db, issuer, issued_invoice):
    invoice = InvoiceStore(db).get_by_public_id(issued_invoice.public_id.upper())

    assert invoice.id == issued_invoice.id
    assert invoice.issuer.id == issuer.id
    assert [item.product for item in invoice.items] == ["Logo design", "Revisions"]


def test_get_by_public_id_unknown_or_malformed(db, issued_invoice):
    store = InvoiceStore(db)
    assert store.get_by_public_id(allocate_public_id()) is None
    assert store.get_by_public_id(str(issued_invoice.id)) is None

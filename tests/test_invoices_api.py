from decimal import Decimal

import pytest
from fastapi.encoders import jsonable_encoder
from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from models import Invoice
from models.invoice import InvoiceStatus
from services.identity_service import allocate_public_id
from services.invoice_store import InvoiceStore
from services.verification_formatter import NOT_FOUND_MESSAGE


@pytest.fixture
def issue(api, auth_headers, invoice_payload):
    def _issue(user, client_id, **overrides):
        return api.post(
            "/api/invoices",
            json=jsonable_encoder(invoice_payload(client_id, **overrides)),
            headers=auth_headers(user),
        )

    return _issue


class TestIssue:
    def test_create_invoice(self, issue, issuer, client_record):
        response = issue(issuer, client_record.id)

        assert response.status_code == 201
        body = response.json()
        assert len(body["public_id"]) == 36
        assert body["status"] == "ACTIVE"
        assert body["invoice_number"].startswith("INV-20261018-")
        assert body["client_name"] == "Acme Corp"
        assert body["total_amount"] == "1000.00"
        assert len(body["content_fingerprint"]) == 64
        assert len(body["items"]) == 2

    def test_explicit_invoice_number_is_kept(self, issue, issuer, client_record):
        response = issue(issuer, client_record.id, invoice_number="2026-0042")
        assert response.json()["invoice_number"] == "2026-0042"

    def test_invoice_without_items_is_rejected(self, issue, issuer, client_record):
        response = issue(issuer, client_record.id, items=[])

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "INVALID_CONTENT"

    def test_inconsistent_totals_are_rejected(self, issue, issuer, client_record):
        response = issue(issuer, client_record.id, total_amount=Decimal("999.00"))
        assert response.status_code == 422

    def test_other_issuers_client_is_not_found(self, issue, other_user, client_record):
        response = issue(other_user, client_record.id)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"

    def test_token_is_required(self, api, client_record, invoice_payload):
        response = api.post("/api/invoices", json=jsonable_encoder(invoice_payload(client_record.id)))
        assert response.status_code == 401

    def test_invalid_token_is_rejected(self, api, client_record, invoice_payload):
        response = api.post(
            "/api/invoices",
            json=jsonable_encoder(invoice_payload(client_record.id)),
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 403


class TestIssuerViews:
    def test_get_own_invoice(self, api, auth_headers, issuer, issued_invoice):
        response = api.get(f"/api/invoices/{issued_invoice.public_id}", headers=auth_headers(issuer))

        assert response.status_code == 200
        assert response.json()["invoice_number"] == issued_invoice.invoice_number

    def test_other_issuers_invoice_is_not_found(self, api, auth_headers, other_user, issued_invoice):
        response = api.get(f"/api/invoices/{issued_invoice.public_id}", headers=auth_headers(other_user))
        assert response.status_code == 404

    def test_list_is_scoped_to_caller(self, api, auth_headers, issuer, other_user, issued_invoice):
        own = api.get("/api/invoices", headers=auth_headers(issuer)).json()
        theirs = api.get("/api/invoices", headers=auth_headers(other_user)).json()

        assert own["total"] == 1
        assert own["invoices"][0]["public_id"] == issued_invoice.public_id
        assert theirs == {"invoices": [], "total": 0, "page": 1, "page_size": 50}

    def test_list_filters_by_status(self, api, auth_headers, issuer, issued_invoice):
        headers = auth_headers(issuer)
        api.post(f"/api/invoices/{issued_invoice.public_id}/revoke", json={"reason": "duplicate"}, headers=headers)

        active = api.get("/api/invoices", params={"status": "ACTIVE"}, headers=headers).json()
        revoked = api.get("/api/invoices", params={"status": "REVOKED"}, headers=headers).json()

        assert active["total"] == 0
        assert revoked["total"] == 1
        assert revoked["invoices"][0]["revoked_reason"] == "duplicate"


class TestVerify:
    def test_verify_by_path(self, api, issuer, issued_invoice):
        response = api.get(f"/api/invoices/verify/{issued_invoice.public_id}")

        assert response.status_code == 200
        assert response.json() == {
            "status": "VERIFIED",
            "message": "Invoice is valid and has not been tampered with.",
            "freelancerName": "Jane Doe Studio",
            "invoiceNumber": issued_invoice.invoice_number,
            "issueDate": "2026-10-18",
            "dueDate": "2026-11-17",
            "currency": "USD",
            "totalAmount": "1000.00",
            "verificationTimestamp": "2026-10-18T09:30:00",
        }

    def test_verify_by_query(self, api, issued_invoice):
        response = api.get("/api/verify", params={"publicId": issued_invoice.public_id})

        assert response.status_code == 200
        assert response.json()["status"] == "VERIFIED"

    def test_issued_then_verified_end_to_end(self, api, issue, issuer, client_record):
        public_id = issue(issuer, client_record.id).json()["public_id"]

        body = api.get(f"/api/invoices/verify/{public_id}").json()

        assert body["status"] == "VERIFIED"
        assert body["totalAmount"] == "1000.00"

    def test_unknown_id_discloses_nothing(self, api, issued_invoice):
        response = api.get(f"/api/invoices/verify/{allocate_public_id()}")

        assert response.status_code == 200
        assert response.json() == {
            "status": "NOT_FOUND",
            "message": NOT_FOUND_MESSAGE,
            "verificationTimestamp": "2026-10-18T09:30:00",
        }

    def test_malformed_id_is_not_found(self, api):
        response = api.get("/api/invoices/verify/not-a-real-id")

        assert response.status_code == 200
        assert response.json()["status"] == "NOT_FOUND"

    def test_database_tampering_is_detected(self, api, db, issued_invoice):
        db.execute(
            update(Invoice).where(Invoice.id == issued_invoice.id).values(total_amount=Decimal("1000.01"))
        )
        db.commit()

        body = api.get(f"/api/invoices/verify/{issued_invoice.public_id}").json()

        assert body["status"] == "MODIFIED"
        assert body["totalAmount"] == "1000.01"
        assert "warning" in body

    def test_store_outage_is_503(self, api, issued_invoice, monkeypatch):
        def unavailable(self, public_id):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        monkeypatch.setattr(InvoiceStore, "get_by_public_id", unavailable)

        response = api.get(f"/api/invoices/verify/{issued_invoice.public_id}")

        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "STORE_UNAVAILABLE"


class TestRevoke:
    def test_revoke_then_verify(self, api, auth_headers, issuer, issued_invoice, clock):
        response = api.post(
            f"/api/invoices/{issued_invoice.public_id}/revoke",
            json={"reason": "duplicate"},
            headers=auth_headers(issuer),
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Invoice revoked",
            "public_id": issued_invoice.public_id,
            "status": "REVOKED",
            "revoked_at": "2026-10-18T09:30:00",
        }

        clock.advance(hours=2)
        body = api.get(f"/api/invoices/verify/{issued_invoice.public_id}").json()
        assert body["status"] == "REVOKED"
        assert body["revokedReason"] == "duplicate"
        assert body["revokedAt"] == "2026-10-18T09:30:00"
        assert body["verificationTimestamp"] == "2026-10-18T11:30:00"

    def test_second_revoke_conflicts(self, api, auth_headers, issuer, issued_invoice):
        url = f"/api/invoices/{issued_invoice.public_id}/revoke"
        api.post(url, json={"reason": "duplicate"}, headers=auth_headers(issuer))

        response = api.post(url, json={"reason": "again"}, headers=auth_headers(issuer))

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "ALREADY_REVOKED"

    def test_non_issuer_is_forbidden(self, api, db, auth_headers, other_user, issued_invoice):
        response = api.post(
            f"/api/invoices/{issued_invoice.public_id}/revoke",
            json={"reason": "not mine"},
            headers=auth_headers(other_user),
        )

        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "FORBIDDEN"
        assert InvoiceStore(db).get_by_public_id(issued_invoice.public_id).status == InvoiceStatus.ACTIVE

    def test_empty_reason_is_bad_request(self, api, auth_headers, issuer, issued_invoice):
        response = api.post(
            f"/api/invoices/{issued_invoice.public_id}/revoke",
            json={"reason": "  "},
            headers=auth_headers(issuer),
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_ARGUMENT"

    def test_unknown_invoice_is_not_found(self, api, auth_headers, issuer):
        response = api.post(
            f"/api/invoices/{allocate_public_id()}/revoke",
            json={"reason": "duplicate"},
            headers=auth_headers(issuer),
        )
        assert response.status_code == 404

    def test_token_is_required(self, api, issued_invoice):
        response = api.post(f"/api/invoices/{issued_invoice.public_id}/revoke", json={"reason": "duplicate"})
        assert response.status_code == 401


def test_health(api):
    response = api.get("/api/health")

    assert response.status_code == 200
    assert set(response.json()) == {"status", "database"}


class TestStoreOutage:
    @staticmethod
    def _unavailable(self, *args, **kwargs):
        raise OperationalError("UPDATE", {}, Exception("connection refused"))

    def test_revoke_outage_is_503(self, api, db, auth_headers, issuer, issued_invoice, monkeypatch):
        monkeypatch.setattr(InvoiceStore, "compare_and_set_revoked", self._unavailable)

        response = api.post(
            f"/api/invoices/{issued_invoice.public_id}/revoke",
            json={"reason": "duplicate"},
            headers=auth_headers(issuer),
        )

        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "STORE_UNAVAILABLE"
        monkeypatch.undo()
        assert InvoiceStore(db).get_by_public_id(issued_invoice.public_id).status == InvoiceStatus.ACTIVE

    def test_create_outage_is_503(self, issue, issuer, client_record, monkeypatch):
        monkeypatch.setattr(InvoiceStore, "create", self._unavailable)

        response = issue(issuer, client_record.id)

        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "STORE_UNAVAILABLE"

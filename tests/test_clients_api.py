def test_create_and_list_clients(api, auth_headers, issuer, other_user):
    headers = auth_headers(issuer)

    created = api.post("/api/clients", json={"name": "Zeta LLC", "email": "ap@zeta.test"}, headers=headers)
    api.post("/api/clients", json={"name": "Acme Corp"}, headers=headers)

    assert created.status_code == 201
    assert created.json()["name"] == "Zeta LLC"

    names = [c["name"] for c in api.get("/api/clients", headers=headers).json()]
    assert names == ["Acme Corp", "Zeta LLC"]
    assert api.get("/api/clients", headers=auth_headers(other_user)).json() == []


def test_get_client(api, auth_headers, issuer, other_user, client_record):
    own = api.get(f"/api/clients/{client_record.id}", headers=auth_headers(issuer))
    theirs = api.get(f"/api/clients/{client_record.id}", headers=auth_headers(other_user))

    assert own.status_code == 200
    assert own.json()["email"] == "billing@acme.test"
    assert theirs.status_code == 404


def test_update_client_changes_only_given_fields(api, auth_headers, issuer, client_record):
    response = api.put(
        f"/api/clients/{client_record.id}",
        json={"phone": "+1 555 0100"},
        headers=auth_headers(issuer),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["phone"] == "+1 555 0100"
    assert body["name"] == "Acme Corp"


def test_other_issuer_cannot_update_client(api, auth_headers, other_user, client_record):
    response = api.put(
        f"/api/clients/{client_record.id}",
        json={"name": "Hijacked"},
        headers=auth_headers(other_user),
    )
    assert response.status_code == 404


def test_renaming_client_keeps_issued_invoice_verified(api, auth_headers, issuer, client_record, issued_invoice):
    api.put(
        f"/api/clients/{client_record.id}",
        json={"name": "Acme Corporation International"},
        headers=auth_headers(issuer),
    )

    invoice = api.get(f"/api/invoices/{issued_invoice.public_id}", headers=auth_headers(issuer)).json()
    verification = api.get(f"/api/invoices/verify/{issued_invoice.public_id}").json()

    assert invoice["client_name"] == "Acme Corp"
    assert verification["status"] == "VERIFIED"


def test_clients_require_token(api):
    assert api.get("/api/clients").status_code == 401


def test_delete_client(api, auth_headers, issuer, client_record):
    headers = auth_headers(issuer)

    response = api.delete(f"/api/clients/{client_record.id}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Client deleted successfully"}
    assert api.get(f"/api/clients/{client_record.id}", headers=headers).status_code == 404


def test_other_issuer_cannot_delete_client(api, auth_headers, issuer, other_user, client_record):
    response = api.delete(f"/api/clients/{client_record.id}", headers=auth_headers(other_user))

    assert response.status_code == 404
    assert api.get(f"/api/clients/{client_record.id}", headers=auth_headers(issuer)).status_code == 200


def test_deleting_client_keeps_issued_invoice_verified(api, auth_headers, issuer, client_record, issued_invoice):
    api.delete(f"/api/clients/{client_record.id}", headers=auth_headers(issuer))

    invoice = api.get(f"/api/invoices/{issued_invoice.public_id}", headers=auth_headers(issuer)).json()
    verification = api.get(f"/api/invoices/verify/{issued_invoice.public_id}").json()

    assert invoice["client_id"] is None
    assert invoice["client_name"] == "Acme Corp"
    assert verification["status"] == "VERIFIED"

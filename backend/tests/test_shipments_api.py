from fastapi.testclient import TestClient

from store.main import app

client = TestClient(app)

URL = "/api/shipments"

DEFAULT_TRACKING_CODE = "AAAAAAAAAA"
UPDATED_TRACKING_CODE = "BBBBBBBBBB"
DEFAULT_DATE = "1970-01-01T00:00:00Z"
UPDATED_DATE = "2024-05-06T07:08:09Z"
DEFAULT_DETAILS = "AAAAAAAAAA"
UPDATED_DETAILS = "BBBBBBBBBB"


def shipment_body(**overrides):
    body = {
        "trackingCode": DEFAULT_TRACKING_CODE,
        "date": DEFAULT_DATE,
        "details": DEFAULT_DETAILS,
    }
    body.update(overrides)
    return body


def create_shipment(**overrides):
    r = client.post(URL, json=shipment_body(**overrides))
    assert r.status_code == 201, r.text
    return r.json()


def invoice_body():
    return {
        "date": DEFAULT_DATE,
        "details": "AAAAAAAAAA",
        "status": "PAID",
        "paymentMethod": "CREDIT_CARD",
        "paymentDate": DEFAULT_DATE,
        "paymentAmount": "1.00",
    }


def test_create_shipment():
    r = client.post(URL, json=shipment_body())
    assert r.status_code == 201
    body = r.json()
    assert isinstance(body["id"], int)
    assert body["trackingCode"] == DEFAULT_TRACKING_CODE
    assert body["date"] == DEFAULT_DATE
    assert body["details"] == DEFAULT_DETAILS
    assert body["invoice"] is None
    assert r.headers["Location"] == f"{URL}/{body['id']}"
    assert r.headers["X-storeApp-alert"] == "storeApp.shipment.created"
    assert r.headers["X-storeApp-params"] == str(body["id"])

    assert client.get(URL).headers["X-Total-Count"] == "1"


def test_create_shipment_with_existing_id():
    r = client.post(URL, json=shipment_body(id=1))
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.idexists"
    assert r.headers["X-storeApp-params"] == "shipment"
    assert client.get(URL).headers["X-Total-Count"] == "0"


def test_date_is_required():
    r = client.post(URL, json=shipment_body(date=None))
    assert r.status_code == 400
    assert client.get(URL).headers["X-Total-Count"] == "0"


def test_create_with_unknown_invoice_is_rejected():
    r = client.post(URL, json=shipment_body(invoice={"id": 424242}))
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.constraintviolation"


def test_get_all_shipments():
    created = create_shipment()
    r = client.get(URL, params={"sort": "id,desc"})
    assert r.status_code == 200
    body = r.json()
    assert [s["id"] for s in body] == [created["id"]]
    assert body[0]["trackingCode"] == DEFAULT_TRACKING_CODE
    assert body[0]["date"] == DEFAULT_DATE
    assert r.headers["X-Total-Count"] == "1"
    assert 'rel="first"' in r.headers["Link"]


def test_get_all_shipments_pages_and_sorts():
    ids = [create_shipment(trackingCode=f"T-{i}")["id"] for i in range(5)]
    r = client.get(URL, params={"page": 1, "size": 2, "sort": "id,desc"})
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == sorted(ids, reverse=True)[2:4]
    assert r.headers["X-Total-Count"] == "5"
    rels = {part.rsplit("rel=", 1)[1].strip('"') for part in r.headers["Link"].split(",<")}
    assert rels == {"next", "prev", "last", "first"}


def test_get_all_shipments_with_unknown_sort_field():
    r = client.get(URL, params={"sort": "nope,asc"})
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.badcriteria"


def test_filter_shipments():
    invoice = client.post("/api/invoices", json=invoice_body()).json()
    linked = create_shipment(trackingCode="LINKED", invoice={"id": invoice["id"]})
    loose = create_shipment(trackingCode="LOOSE")

    r = client.get(URL, params={"invoiceId.specified": "false"})
    assert [s["id"] for s in r.json()] == [loose["id"]]
    assert r.headers["X-Total-Count"] == "1"

    r = client.get(URL, params={"trackingCode.contains": "LINK"})
    body = r.json()
    assert [s["id"] for s in body] == [linked["id"]]
    assert body[0]["invoice"]["id"] == invoice["id"]
    assert body[0]["invoice"]["paymentAmount"] == "1"

    r = client.get(URL, params={"trackingCode.bogus": "x"})
    assert r.status_code == 400


def test_get_shipment():
    created = create_shipment()
    r = client.get(f"{URL}/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created


def test_get_shipment_with_invoice():
    invoice = client.post("/api/invoices", json=invoice_body()).json()
    created = create_shipment(invoice={"id": invoice["id"]})
    body = client.get(f"{URL}/{created['id']}").json()
    assert body["invoice"]["id"] == invoice["id"]
    assert body["invoice"]["status"] == "PAID"
    assert body["invoice"]["paymentMethod"] == "CREDIT_CARD"


def test_get_non_existing_shipment():
    assert client.get(f"{URL}/987654").status_code == 404


def test_put_existing_shipment():
    created = create_shipment()
    updated = shipment_body(
        id=created["id"],
        trackingCode=UPDATED_TRACKING_CODE,
        date=UPDATED_DATE,
        details=UPDATED_DETAILS,
    )
    r = client.put(f"{URL}/{created['id']}", json=updated)
    assert r.status_code == 200
    assert r.headers["X-storeApp-alert"] == "storeApp.shipment.updated"

    body = client.get(f"{URL}/{created['id']}").json()
    assert body["trackingCode"] == UPDATED_TRACKING_CODE
    assert body["date"] == UPDATED_DATE
    assert body["details"] == UPDATED_DETAILS


def test_put_non_existing_shipment():
    r = client.put(f"{URL}/987654", json=shipment_body(id=987654))
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.idnotfound"


def test_put_without_id():
    created = create_shipment()
    r = client.put(f"{URL}/{created['id']}", json=shipment_body())
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.idnull"


def test_put_with_id_mismatch_shipment():
    created = create_shipment()
    r = client.put(f"{URL}/{created['id'] + 1}", json=shipment_body(id=created["id"]))
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.idinvalid"


def test_put_and_patch_on_collection_are_not_allowed():
    assert client.put(URL, json=shipment_body(id=1)).status_code == 405
    assert client.patch(URL, json=shipment_body(id=1)).status_code == 405


def test_partial_update_shipment():
    created = create_shipment()
    r = client.patch(
        f"{URL}/{created['id']}",
        content=f'{{"id": {created["id"]}, "trackingCode": "{UPDATED_TRACKING_CODE}", "details": null}}',
        headers={"Content-Type": "application/merge-patch+json"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["trackingCode"] == UPDATED_TRACKING_CODE
    # null and missing fields keep the stored values
    assert body["details"] == DEFAULT_DETAILS
    assert body["date"] == DEFAULT_DATE


def test_partial_update_attaches_invoice():
    invoice = client.post("/api/invoices", json=invoice_body()).json()
    created = create_shipment()
    r = client.patch(
        f"{URL}/{created['id']}",
        json={"id": created["id"], "invoice": {"id": invoice["id"]}},
    )
    assert r.status_code == 200
    assert r.json()["invoice"]["id"] == invoice["id"]


def test_patch_non_existing_shipment():
    r = client.patch(f"{URL}/987654", json={"id": 987654, "details": UPDATED_DETAILS})
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.idnotfound"


def test_patch_with_id_mismatch_shipment():
    created = create_shipment()
    r = client.patch(f"{URL}/{created['id']}", json={"id": created["id"] + 1})
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.idinvalid"


def test_delete_shipment():
    created = create_shipment()
    r = client.delete(f"{URL}/{created['id']}")
    assert r.status_code == 204
    assert r.headers["X-storeApp-alert"] == "storeApp.shipment.deleted"
    assert client.get(f"{URL}/{created['id']}").status_code == 404
    assert client.get(URL).headers["X-Total-Count"] == "0"


def test_contains_filter_on_non_text_field():
    create_shipment()
    r = client.get(URL, params={"date.contains": "1970"})
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.badcriteria"


def test_shipment_id_outside_64_bit_range():
    assert client.get(f"{URL}/99999999999999999999").status_code == 400
    assert client.delete(f"{URL}/99999999999999999999").status_code == 400
    r = client.get(URL, params={"id.equals": "99999999999999999999"})
    assert r.status_code == 400
    assert r.headers["X-storeApp-error"] == "error.badcriteria"


def test_alert_headers_are_exposed_to_browsers():
    r = client.post(URL, json=shipment_body(), headers={"Origin": "http://localhost:9000"})
    assert r.status_code == 201
    exposed = {h.strip() for h in r.headers["Access-Control-Expose-Headers"].split(",")}
    for name in ("X-storeApp-alert", "X-storeApp-error", "X-storeApp-params", "X-Total-Count", "Link"):
        assert name in exposed

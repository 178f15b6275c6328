from datetime import datetime, timezone
from decimal import Decimal

import pytest

from store.errors import ConflictingUpdateError
from store.models.enumeration import InvoiceStatus, PaymentMethod
from store.models.invoice import Invoice
from store.models.shipment import Shipment
from store.repositories.criteria import where
from store.repositories.invoice_repo import InvoiceRepository
from store.repositories.pagination import Pageable
from store.repositories.shipment_repo import ShipmentRepository

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def make_invoice(**overrides):
    fields = dict(
        date=EPOCH,
        details="AAAAAAAAAA",
        status=InvoiceStatus.PAID,
        payment_method=PaymentMethod.CREDIT_CARD,
        payment_date=EPOCH,
        payment_amount=Decimal("10.00"),
    )
    fields.update(overrides)
    return Invoice(**fields)


def make_shipment(code="AAAAAAAAAA", **overrides):
    return Shipment(tracking_code=code, date=EPOCH, details="AAAAAAAAAA", **overrides)


def test_insert_assigns_id_and_find_by_id_returns_equal_entity(db):
    repo = ShipmentRepository(db)
    first = repo.insert(make_shipment())
    second = repo.insert(make_shipment("BBBBBBBBBB"))
    db.commit()

    assert first.id is not None and second.id is not None
    assert first.id != second.id
    found = repo.find_by_id(first.id)
    assert found == first
    assert (found.tracking_code, found.date, found.details) == ("AAAAAAAAAA", EPOCH, "AAAAAAAAAA")


def test_find_by_id_missing_returns_none(db):
    assert ShipmentRepository(db).find_by_id(123456) is None


def test_save_of_unknown_id_is_a_conflicting_update(db):
    repo = ShipmentRepository(db)
    ghost = make_shipment(id=987654)
    assert repo.update(ghost) == 0
    with pytest.raises(ConflictingUpdateError) as exc:
        repo.save(ghost)
    assert "Unable to update Shipment with id = 987654" in str(exc.value)


def test_save_updates_existing(db):
    repo = ShipmentRepository(db)
    shipment = repo.save(make_shipment())
    shipment.details = "BBBBBBBBBB"
    assert repo.update(shipment) == 1
    assert repo.save(shipment) is shipment
    db.commit()
    assert repo.find_by_id(shipment.id).details == "BBBBBBBBBB"


def test_join_with_null_foreign_key_gives_no_association(db):
    repo = ShipmentRepository(db)
    shipment = repo.insert(make_shipment())
    db.commit()
    found = repo.find_by_id(shipment.id)
    assert found.invoice is None
    assert found.invoice_id is None


def test_join_populates_invoice(db):
    invoice = InvoiceRepository(db).insert(make_invoice())
    shipment = ShipmentRepository(db).insert(make_shipment(invoice_id=invoice.id))
    db.commit()

    found = ShipmentRepository(db).find_by_id(shipment.id)
    assert found.invoice == invoice
    assert found.invoice.status is InvoiceStatus.PAID
    assert found.invoice_id == invoice.id


def test_invoice_joins_product_order(db, product_order):
    repo = InvoiceRepository(db)
    with_order = repo.insert(make_invoice(order_id=product_order.id))
    without = repo.insert(make_invoice())
    db.commit()

    found = repo.find_by_id(with_order.id)
    assert found.order == product_order
    assert found.order.code == "ORD-0001"
    assert repo.find_by_id(without.id).order is None
    assert [i.id for i in repo.find_by_order(product_order.id)] == [with_order.id]
    assert [i.id for i in repo.find_all_where_order_is_null()] == [without.id]


def test_payment_amount_reads_back_without_trailing_zeros(db):
    repo = InvoiceRepository(db)
    invoice = repo.insert(make_invoice(payment_amount=Decimal("10.00")))
    db.commit()
    found = repo.find_by_id(invoice.id)
    assert str(found.payment_amount) == "10"
    assert found.payment_amount == Decimal("10.00")


def test_find_all_pages_and_sorts(db):
    repo = ShipmentRepository(db)
    for code in ("C", "A", "B", "D"):
        repo.insert(make_shipment(code))
    db.commit()

    page = list(repo.find_all(Pageable.of(page=0, size=3, sort=["trackingCode,asc"])))
    assert [s.tracking_code for s in page] == ["A", "B", "C"]
    page = list(repo.find_all(Pageable.of(page=1, size=3, sort=["trackingCode,asc"])))
    assert [s.tracking_code for s in page] == ["D"]
    assert repo.count_all() == 4


def test_find_all_by_criteria(db):
    invoice = InvoiceRepository(db).insert(make_invoice())
    repo = ShipmentRepository(db)
    linked = repo.insert(make_shipment("LINKED-1", invoice_id=invoice.id))
    loose = repo.insert(make_shipment("LOOSE-1"))
    db.commit()

    assert list(repo.find_by_invoice(invoice.id)) == [linked]
    assert list(repo.find_all_where_invoice_is_null()) == [loose]
    criteria = where("trackingCode").contains("LOO")
    assert list(repo.find_all_by(None, criteria)) == [loose]
    assert repo.count_all(criteria) == 1


def test_find_all_is_lazy(db):
    repo = ShipmentRepository(db)
    repo.insert(make_shipment())
    db.commit()
    result = repo.find_all()
    assert not isinstance(result, list)
    assert len(list(result)) == 1


def test_delete_by_id(db):
    repo = ShipmentRepository(db)
    shipment = repo.insert(make_shipment())
    db.commit()
    assert repo.exists_by_id(shipment.id)
    assert repo.delete_by_id(shipment.id) == 1
    db.commit()
    assert not repo.exists_by_id(shipment.id)
    assert repo.delete_by_id(shipment.id) == 0


def test_largest_accepted_payment_amount_round_trips(db):
    repo = InvoiceRepository(db)
    amount = Decimal("9999999999999.99")
    invoice = repo.insert(make_invoice(payment_amount=amount))
    db.commit()
    assert repo.find_by_id(invoice.id).payment_amount == amount


def test_not_in_and_does_not_contain(db):
    repo = ShipmentRepository(db)
    alpha = repo.insert(make_shipment("ALPHA-1"))
    beta = repo.insert(make_shipment("BETA-1"))
    gamma = repo.insert(make_shipment("GAMMA-1"))
    db.commit()

    by_id = Pageable.of(sort=["id"])
    assert list(repo.find_all_by(by_id, where("id").not_in(alpha.id, gamma.id))) == [beta]
    found = list(repo.find_all_by(by_id, where("trackingCode").does_not_contain("ET")))
    assert found == [alpha, gamma]


def test_does_not_contain_treats_wildcards_literally(db):
    repo = ShipmentRepository(db)
    plain = repo.insert(make_shipment("PLAIN"))
    repo.insert(make_shipment("50%_OFF"))
    db.commit()
    assert list(repo.find_all_by(None, where("trackingCode").does_not_contain("%_"))) == [plain]

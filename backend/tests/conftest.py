import os
import tempfile

# must be set before anything imports store.config
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(
    tempfile.gettempdir(), "store_backend_test.db"
)
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402

from store.db import SessionLocal, init_db  # noqa: E402
from store.models.enumeration import OrderStatus  # noqa: E402
from store.models.product_order import ProductOrder  # noqa: E402
from store.repositories.invoice_repo import InvoiceRepository  # noqa: E402
from store.repositories.product_order_repo import ProductOrderRepository  # noqa: E402
from store.repositories.shipment_repo import ShipmentRepository  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def setup_db():
    init_db(reset=True)


@pytest.fixture(autouse=True)
def clean_tables():
    # children first, the foreign keys are enforced
    db = SessionLocal()
    try:
        ShipmentRepository(db).delete_all()
        InvoiceRepository(db).delete_all()
        ProductOrderRepository(db).delete_all()
        db.commit()
    finally:
        db.close()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def product_order(db):
    order = ProductOrder(
        placed_date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        status=OrderStatus.COMPLETED,
        code="ORD-0001",
    )
    ProductOrderRepository(db).insert(order)
    db.commit()
    return order

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import validates

from store.db import Base
from store.models.entity import IdentityMixin
from store.models.enumeration import InvoiceStatus, PaymentMethod
from store.utils.numbers import strip_trailing_zeros


class Invoice(IdentityMixin, Base):
    __tablename__ = "invoice"
    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime(timezone=True), nullable=False)
    details = Column(String(255), nullable=True)
    status = Column(
        Enum(InvoiceStatus, native_enum=False, length=32), nullable=False
    )
    payment_method = Column(
        Enum(PaymentMethod, native_enum=False, length=32), nullable=False
    )
    payment_date = Column(DateTime(timezone=True), nullable=False)
    payment_amount = Column(Numeric(21, 2), nullable=False)
    order_id = Column(
        Integer,
        ForeignKey("product_order.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # not mapped: filled from the joined row / derived by lookup
    _order = None
    _shipments = None

    @validates("payment_amount")
    def _normalize_payment_amount(self, key, value):
        return strip_trailing_zeros(value)

    @property
    def order(self):
        return self._order

    @order.setter
    def order(self, product_order):
        self._order = product_order
        self.order_id = product_order.id if product_order is not None else None

    @property
    def shipments(self):
        if self._shipments is None:
            self._shipments = set()
        return self._shipments

    @shipments.setter
    def shipments(self, shipments):
        for shipment in self._shipments or ():
            shipment.invoice = None
        self._shipments = set()
        for shipment in shipments or ():
            self.add_shipment(shipment)

    def add_shipment(self, shipment):
        self.shipments.add(shipment)
        shipment.invoice = self
        return self

    def remove_shipment(self, shipment):
        self.shipments.discard(shipment)
        shipment.invoice = None
        return self

    def __repr__(self):
        return (
            f"<Invoice id={self.id} status={self.status} "
            f"payment_amount={self.payment_amount} order_id={self.order_id}>"
        )

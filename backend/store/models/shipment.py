from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from store.db import Base
from store.models.entity import IdentityMixin


class Shipment(IdentityMixin, Base):
    __tablename__ = "shipment"
    id = Column(Integer, primary_key=True, autoincrement=True)
    tracking_code = Column(String(255), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False)
    details = Column(String(255), nullable=True)
    # owning side of Invoice <-> Shipment
    invoice_id = Column(
        Integer, ForeignKey("invoice.id"), nullable=True, index=True
    )

    _invoice = None

    @property
    def invoice(self):
        return self._invoice

    @invoice.setter
    def invoice(self, invoice):
        self._invoice = invoice
        self.invoice_id = invoice.id if invoice is not None else None

    def __repr__(self):
        return (
            f"<Shipment id={self.id} tracking_code={self.tracking_code} "
            f"invoice_id={self.invoice_id}>"
        )

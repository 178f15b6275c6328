from typing import Iterator

from store.models.invoice import Invoice
from store.models.shipment import Shipment
from store.repositories.base_repo import Association, EntityRepository
from store.repositories.criteria import where
from store.repositories.rowmapper import InvoiceRowMapper, ShipmentRowMapper


class ShipmentRepository(EntityRepository):
    """Shipments joined with their (optional) invoice under prefix `invoice`."""

    entity_name = "Shipment"
    table = Shipment.__table__
    mapper_class = ShipmentRowMapper

    def _association(self):
        return Association(
            table=Invoice.__table__,
            alias="invoice",
            prefix="invoice",
            foreign_key="invoice_id",
            attribute="invoice",
            mapper=InvoiceRowMapper(self.converter),
        )

    def find_by_invoice(self, invoice_id: int) -> Iterator[Shipment]:
        return self.find_all_by(criteria=where("invoice_id").is_(invoice_id))

    def find_all_where_invoice_is_null(self) -> Iterator[Shipment]:
        return self.find_all_by(criteria=where("invoice_id").is_null())

from typing import Iterator

from store.models.invoice import Invoice
from store.models.product_order import ProductOrder
from store.repositories.base_repo import Association, EntityRepository
from store.repositories.criteria import where
from store.repositories.rowmapper import InvoiceRowMapper, ProductOrderRowMapper


class InvoiceRepository(EntityRepository):
    """Invoices joined with their (optional) product order under prefix `order`."""

    entity_name = "Invoice"
    table = Invoice.__table__
    mapper_class = InvoiceRowMapper

    def _association(self):
        return Association(
            table=ProductOrder.__table__,
            alias="e_order",
            prefix="order",
            foreign_key="order_id",
            attribute="order",
            mapper=ProductOrderRowMapper(self.converter),
        )

    def find_by_order(self, order_id: int) -> Iterator[Invoice]:
        return self.find_all_by(criteria=where("order_id").is_(order_id))

    def find_all_where_order_is_null(self) -> Iterator[Invoice]:
        return self.find_all_by(criteria=where("order_id").is_null())

from typing import Optional

from sqlalchemy.orm import Session

from store.models.invoice import Invoice
from store.repositories.invoice_repo import InvoiceRepository
from store.repositories.shipment_repo import ShipmentRepository
from store.services.entity_service import EntityService


class InvoiceService(EntityService):
    entity_name = "invoice"
    repository_class = InvoiceRepository

    def __init__(
        self,
        db: Session,
        repository: Optional[InvoiceRepository] = None,
        shipment_repository: Optional[ShipmentRepository] = None,
    ):
        super().__init__(db, repository)
        self.shipment_repository = shipment_repository or ShipmentRepository(db)

    def find_one(self, entity_id) -> Optional[Invoice]:
        """
        Load the invoice with its order, and derive its shipments from the
        foreign key they hold rather than from a stored list.
        """
        invoice = super().find_one(entity_id)
        if invoice is not None:
            invoice.shipments = list(self.shipment_repository.find_by_invoice(invoice.id))
        return invoice

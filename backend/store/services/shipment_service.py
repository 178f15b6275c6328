from store.repositories.shipment_repo import ShipmentRepository
from store.services.entity_service import EntityService


class ShipmentService(EntityService):
    entity_name = "shipment"
    repository_class = ShipmentRepository

from store.models.product_order import ProductOrder
from store.repositories.base_repo import EntityRepository
from store.repositories.rowmapper import ProductOrderRowMapper


class ProductOrderRepository(EntityRepository):
    entity_name = "ProductOrder"
    table = ProductOrder.__table__
    mapper_class = ProductOrderRowMapper

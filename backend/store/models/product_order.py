from sqlalchemy import Column, DateTime, Enum, Integer, String

from store.db import Base
from store.models.entity import IdentityMixin
from store.models.enumeration import OrderStatus


class ProductOrder(IdentityMixin, Base):
    __tablename__ = "product_order"
    id = Column(Integer, primary_key=True, autoincrement=True)
    placed_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(
        Enum(OrderStatus, native_enum=False, length=32), nullable=False
    )
    code = Column(String(255), nullable=False, index=True)

    def __repr__(self):
        return f"<ProductOrder id={self.id} code={self.code} status={self.status}>"

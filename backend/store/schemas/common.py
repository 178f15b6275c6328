from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from store.db import MAX_ID
from store.models.enumeration import InvoiceStatus, OrderStatus, PaymentMethod


class CamelModel(BaseModel):
    """JSON in camelCase, attributes in snake_case, readable from ORM objects."""

    model_config = ConfigDict(
        from_attributes=True, populate_by_name=True, alias_generator=to_camel
    )


class EntityRef(CamelModel):
    id: int = Field(le=MAX_ID)


class ProductOrderOut(CamelModel):
    id: int
    placed_date: datetime
    status: OrderStatus
    code: str


class InvoiceSummary(CamelModel):
    id: int
    date: datetime
    details: Optional[str] = None
    status: InvoiceStatus
    payment_method: PaymentMethod
    payment_date: datetime
    payment_amount: Decimal


class ShipmentSummary(CamelModel):
    id: int
    tracking_code: Optional[str] = None
    date: datetime
    details: Optional[str] = None

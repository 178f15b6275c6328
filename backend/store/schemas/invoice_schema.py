from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from store.db import DECIMAL_MAX_DIGITS
from store.models.enumeration import InvoiceStatus, PaymentMethod
from store.models.invoice import Invoice
from store.schemas.common import (
    CamelModel,
    EntityRef,
    InvoiceSummary,
    ProductOrderOut,
    ShipmentSummary,
)


class InvoiceIn(CamelModel):
    id: Optional[int] = None
    date: datetime
    details: Optional[str] = Field(default=None, max_length=255)
    status: InvoiceStatus
    payment_method: PaymentMethod
    payment_date: datetime
    payment_amount: Decimal = Field(max_digits=DECIMAL_MAX_DIGITS, decimal_places=2)
    order: Optional[EntityRef] = None

    def to_entity(self) -> Invoice:
        return Invoice(
            id=self.id,
            date=self.date,
            details=self.details,
            status=self.status,
            payment_method=self.payment_method,
            payment_date=self.payment_date,
            payment_amount=self.payment_amount,
            order_id=self.order.id if self.order is not None else None,
        )


class InvoicePatch(CamelModel):
    id: Optional[int] = None
    date: Optional[datetime] = None
    details: Optional[str] = Field(default=None, max_length=255)
    status: Optional[InvoiceStatus] = None
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[datetime] = None
    payment_amount: Optional[Decimal] = Field(
        default=None, max_digits=DECIMAL_MAX_DIGITS, decimal_places=2
    )
    order: Optional[EntityRef] = None

    def changes(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude={"id", "order"}, exclude_none=True)
        if self.order is not None:
            fields["order_id"] = self.order.id
        return fields


class InvoiceOut(InvoiceSummary):
    order: Optional[ProductOrderOut] = None
    shipments: List[ShipmentSummary] = []

    @field_validator("shipments", mode="before")
    @classmethod
    def _ordered_by_id(cls, value):
        if value is None:
            return []
        return sorted(value, key=lambda s: getattr(s, "id", None) or 0)

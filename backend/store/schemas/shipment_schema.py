from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from store.models.shipment import Shipment
from store.schemas.common import CamelModel, EntityRef, InvoiceSummary, ShipmentSummary


class ShipmentIn(CamelModel):
    id: Optional[int] = None
    tracking_code: Optional[str] = Field(default=None, max_length=255)
    date: datetime
    details: Optional[str] = Field(default=None, max_length=255)
    invoice: Optional[EntityRef] = None

    def to_entity(self) -> Shipment:
        return Shipment(
            id=self.id,
            tracking_code=self.tracking_code,
            date=self.date,
            details=self.details,
            invoice_id=self.invoice.id if self.invoice is not None else None,
        )


class ShipmentPatch(CamelModel):
    """Merge-patch body: null or missing fields leave the stored value alone."""

    id: Optional[int] = None
    tracking_code: Optional[str] = Field(default=None, max_length=255)
    date: Optional[datetime] = None
    details: Optional[str] = Field(default=None, max_length=255)
    invoice: Optional[EntityRef] = None

    def changes(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude={"id", "invoice"}, exclude_none=True)
        if self.invoice is not None:
            fields["invoice_id"] = self.invoice.id
        return fields


class ShipmentOut(ShipmentSummary):
    invoice: Optional[InvoiceSummary] = None

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Table

from store.models.enumeration import InvoiceStatus, OrderStatus, PaymentMethod
from store.models.invoice import Invoice
from store.models.product_order import ProductOrder
from store.models.shipment import Shipment
from store.repositories.converter import ColumnConverter, converter as default_converter


class RowMapper:
    """
    Converts a result row into an entity, with proper type conversions.

    Every declared column is read from `<prefix>_<column>`, so the same mapper
    serves the main entity and the same entity joined under another prefix.
    A column missing from the row maps to None.
    """

    entity_class = None
    # column name -> semantic type handed to the converter
    columns: Dict[str, type] = {}

    def __init__(self, converter: Optional[ColumnConverter] = None):
        self.converter = converter or default_converter

    def __call__(self, row: Mapping[str, Any], prefix: str):
        entity = self.entity_class()
        for name, target in self.columns.items():
            setattr(entity, name, self.converter.from_row(row, f"{prefix}_{name}", target))
        return entity

    def map_optional(self, row: Mapping[str, Any], prefix: str):
        """Map a LEFT JOINed entity; None when the join found nothing."""
        if row.get(f"{prefix}_id") is None:
            return None
        return self(row, prefix)

    def select_columns(self, table: Table, prefix: str) -> List:
        return [table.c[name].label(f"{prefix}_{name}") for name in self.columns]

    def to_values(self, entity, include_id: bool = False) -> Dict[str, Any]:
        return {
            name: self.converter.to_column(getattr(entity, name))
            for name in self.columns
            if include_id or name != "id"
        }


class ProductOrderRowMapper(RowMapper):
    entity_class = ProductOrder
    columns = {
        "id": int,
        "placed_date": datetime,
        "status": OrderStatus,
        "code": str,
    }


class InvoiceRowMapper(RowMapper):
    entity_class = Invoice
    columns = {
        "id": int,
        "date": datetime,
        "details": str,
        "status": InvoiceStatus,
        "payment_method": PaymentMethod,
        "payment_date": datetime,
        "payment_amount": Decimal,
        "order_id": int,
    }


class ShipmentRowMapper(RowMapper):
    entity_class = Shipment
    columns = {
        "id": int,
        "tracking_code": str,
        "date": datetime,
        "details": str,
        "invoice_id": int,
    }

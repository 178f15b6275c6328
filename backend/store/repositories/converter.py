import enum
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Mapping, Optional

INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


class ColumnConverter:
    """
    Coerces raw column values to the semantic type a field declares, and
    entity values back to what the driver should bind.

    Timestamps are always handed out timezone-aware in UTC: drivers that
    store them without an offset (SQLite) return naive values, which are
    read as UTC.
    """

    def from_row(self, row: Mapping[str, Any], column: str, target: type):
        return self.convert(row.get(column), target)

    def convert(self, value, target: type):
        if value is None:
            return None
        if target is datetime:
            return self._to_datetime(value)
        if target is Decimal:
            return value if isinstance(value, Decimal) else Decimal(str(value))
        if isinstance(target, type) and issubclass(target, enum.Enum):
            return self._to_enum(value, target)
        if target is bool:
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes")
            return bool(value)
        if target is int:
            number = int(value)
            if not INT64_MIN <= number <= INT64_MAX:
                raise ValueError(f"{value!r} is out of the 64-bit integer range")
            return number
        if target is str:
            return value.value if isinstance(value, enum.Enum) else str(value)
        raise TypeError(f"Unsupported column target type: {target!r}")

    def to_column(self, value):
        if isinstance(value, datetime):
            return self._to_datetime(value)
        return value

    def _to_datetime(self, value) -> datetime:
        if isinstance(value, str):
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if not isinstance(value, datetime):
            raise TypeError(f"Cannot convert {value!r} to datetime")
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def _to_enum(self, value, target: type) -> Optional[enum.Enum]:
        if isinstance(value, target):
            return value
        try:
            return target(value)
        except ValueError:
            pass
        try:
            return target[str(value)]
        except KeyError:
            raise ValueError(f"{value!r} is not a valid {target.__name__}") from None


converter = ColumnConverter()

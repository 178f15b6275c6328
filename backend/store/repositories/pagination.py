import enum
from dataclasses import dataclass, field
from typing import Iterable, Tuple

from store.errors import InvalidCriteriaError


class Direction(enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Order:
    property: str
    direction: Direction = Direction.ASC


def parse_sort(values: Iterable[str]) -> Tuple[Order, ...]:
    """
    Parse `sort` query values: `id`, `id,desc`, `date,details,asc`.
    A trailing asc/desc applies to every property before it.
    """
    orders = []
    for raw in values or ():
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        if not parts:
            continue
        direction = Direction.ASC
        if parts[-1].lower() in ("asc", "desc"):
            direction = Direction(parts.pop().lower())
        if not parts:
            raise InvalidCriteriaError(f"Sort without a property: {raw!r}")
        orders.extend(Order(p, direction) for p in parts)
    return tuple(orders)


@dataclass(frozen=True)
class Pageable:
    page: int = 0
    size: int = 20
    sort: Tuple[Order, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.page < 0:
            raise InvalidCriteriaError("Page index must not be less than zero")
        if self.size < 1:
            raise InvalidCriteriaError("Page size must not be less than one")

    @classmethod
    def of(cls, page: int = 0, size: int = 20, sort: Iterable[str] = ()) -> "Pageable":
        return cls(page=page, size=size, sort=parse_sort(sort))

    @property
    def offset(self) -> int:
        return self.page * self.size

    def total_pages(self, total: int) -> int:
        return -(-total // self.size)

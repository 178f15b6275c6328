from typing import Optional

from starlette.datastructures import QueryParams

from store.repositories.criteria import Criteria, Criterion, Operator, all_of

# query params that belong to paging, not filtering
RESERVED = {"page", "size", "sort"}


def criteria_from_query(params: QueryParams) -> Optional[Criteria]:
    """
    Build criteria from `<field>.<operator>=<value>` query params, e.g.
    `trackingCode.contains=AB&invoiceId.specified=false&id.in=1,2`.
    All filters are AND-ed; None when the request has no filters.
    """
    parts = []
    for key, value in params.multi_items():
        if key in RESERVED or "." not in key:
            continue
        field, op_name = key.rsplit(".", 1)
        op = Operator.parse(op_name)
        if op in (Operator.IN, Operator.NOT_IN):
            value = tuple(v for v in value.split(",") if v != "")
        parts.append(Criterion(field, op, value))
    return all_of(*parts)

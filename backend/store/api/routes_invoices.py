from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store.api.alerts import (
    entity_creation_alert,
    entity_deletion_alert,
    entity_update_alert,
    to_http_exception,
)
from store.api.filters import criteria_from_query
from store.api.pagination import pagination_headers
from store.config import settings
from store.db import MAX_ID, get_db
from store.errors import StoreError
from store.repositories.pagination import Pageable
from store.schemas.invoice_schema import InvoiceIn, InvoiceOut, InvoicePatch
from store.services.invoice_service import InvoiceService
from store.utils.logs import get_logger

router = APIRouter(prefix="/api/invoices", tags=["invoices"])
log = get_logger(__name__)

ENTITY_NAME = "invoice"
InvoiceId = Annotated[int, Path(le=MAX_ID)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=InvoiceOut,
    summary="Create a new invoice",
)
def create_invoice(payload: InvoiceIn, response: Response, db: Session = Depends(get_db)):
    log.debug("REST request to save Invoice : %s", payload)
    svc = InvoiceService(db)
    try:
        result = svc.create(payload.to_entity())
    except (StoreError, IntegrityError) as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers["Location"] = f"/api/invoices/{result.id}"
    response.headers.update(entity_creation_alert(ENTITY_NAME, result.id))
    return result


@router.put("/{invoice_id}", response_model=InvoiceOut, summary="Update an existing invoice")
def update_invoice(
    invoice_id: InvoiceId,
    payload: InvoiceIn,
    response: Response,
    db: Session = Depends(get_db),
):
    log.debug("REST request to update Invoice : %s, %s", invoice_id, payload)
    svc = InvoiceService(db)
    try:
        result = svc.update(invoice_id, payload.to_entity())
    except (StoreError, IntegrityError) as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers.update(entity_update_alert(ENTITY_NAME, result.id))
    return result


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceOut,
    summary="Partially update an invoice; null fields are ignored",
)
def partial_update_invoice(
    invoice_id: InvoiceId,
    payload: InvoicePatch,
    response: Response,
    db: Session = Depends(get_db),
):
    log.debug("REST request to partial update Invoice partially : %s, %s", invoice_id, payload)
    svc = InvoiceService(db)
    try:
        result = svc.partial_update(invoice_id, payload.id, payload.changes())
    except (StoreError, IntegrityError) as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers.update(entity_update_alert(ENTITY_NAME, result.id))
    return result


@router.get("", response_model=List[InvoiceOut], summary="Get a page of invoices")
def get_all_invoices(
    request: Request,
    response: Response,
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort: List[str] = Query(default=[]),
    db: Session = Depends(get_db),
):
    log.debug("REST request to get a page of Invoices")
    svc = InvoiceService(db)
    try:
        pageable = Pageable.of(page, size, sort)
        criteria = criteria_from_query(request.query_params)
        total = svc.count_all(criteria)
        items = list(svc.find_all_by(pageable, criteria))
    except StoreError as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers.update(pagination_headers(request.url, pageable, total))
    return items


@router.get(
    "/{invoice_id}",
    response_model=InvoiceOut,
    summary="Get one invoice with its order and shipments",
)
def get_invoice(invoice_id: InvoiceId, db: Session = Depends(get_db)):
    log.debug("REST request to get Invoice : %s", invoice_id)
    try:
        return InvoiceService(db).get_one(invoice_id)
    except StoreError as e:
        raise to_http_exception(e, ENTITY_NAME)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an invoice",
)
def delete_invoice(invoice_id: InvoiceId, db: Session = Depends(get_db)):
    log.debug("REST request to delete Invoice : %s", invoice_id)
    try:
        InvoiceService(db).delete(invoice_id)
    except IntegrityError as e:
        # shipments still point at this invoice
        raise to_http_exception(e, ENTITY_NAME)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_deletion_alert(ENTITY_NAME, invoice_id),
    )

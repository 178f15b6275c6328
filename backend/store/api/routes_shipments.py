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
from store.schemas.shipment_schema import ShipmentIn, ShipmentOut, ShipmentPatch
from store.services.shipment_service import ShipmentService
from store.utils.logs import get_logger

router = APIRouter(prefix="/api/shipments", tags=["shipments"])
log = get_logger(__name__)

ENTITY_NAME = "shipment"
ShipmentId = Annotated[int, Path(le=MAX_ID)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ShipmentOut,
    summary="Create a new shipment",
)
def create_shipment(payload: ShipmentIn, response: Response, db: Session = Depends(get_db)):
    log.debug("REST request to save Shipment : %s", payload)
    svc = ShipmentService(db)
    try:
        result = svc.create(payload.to_entity())
    except (StoreError, IntegrityError) as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers["Location"] = f"/api/shipments/{result.id}"
    response.headers.update(entity_creation_alert(ENTITY_NAME, result.id))
    return result


@router.put("/{shipment_id}", response_model=ShipmentOut, summary="Update an existing shipment")
def update_shipment(
    shipment_id: ShipmentId,
    payload: ShipmentIn,
    response: Response,
    db: Session = Depends(get_db),
):
    log.debug("REST request to update Shipment : %s, %s", shipment_id, payload)
    svc = ShipmentService(db)
    try:
        result = svc.update(shipment_id, payload.to_entity())
    except (StoreError, IntegrityError) as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers.update(entity_update_alert(ENTITY_NAME, result.id))
    return result


@router.patch(
    "/{shipment_id}",
    response_model=ShipmentOut,
    summary="Partially update a shipment; null fields are ignored",
)
def partial_update_shipment(
    shipment_id: ShipmentId,
    payload: ShipmentPatch,
    response: Response,
    db: Session = Depends(get_db),
):
    log.debug("REST request to partial update Shipment partially : %s, %s", shipment_id, payload)
    svc = ShipmentService(db)
    try:
        result = svc.partial_update(shipment_id, payload.id, payload.changes())
    except (StoreError, IntegrityError) as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers.update(entity_update_alert(ENTITY_NAME, result.id))
    return result


@router.get("", response_model=List[ShipmentOut], summary="Get a page of shipments")
def get_all_shipments(
    request: Request,
    response: Response,
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort: List[str] = Query(default=[]),
    db: Session = Depends(get_db),
):
    log.debug("REST request to get a page of Shipments")
    svc = ShipmentService(db)
    try:
        pageable = Pageable.of(page, size, sort)
        criteria = criteria_from_query(request.query_params)
        total = svc.count_all(criteria)
        items = list(svc.find_all_by(pageable, criteria))
    except StoreError as e:
        raise to_http_exception(e, ENTITY_NAME)
    response.headers.update(pagination_headers(request.url, pageable, total))
    return items


@router.get("/{shipment_id}", response_model=ShipmentOut, summary="Get one shipment")
def get_shipment(shipment_id: ShipmentId, db: Session = Depends(get_db)):
    log.debug("REST request to get Shipment : %s", shipment_id)
    try:
        return ShipmentService(db).get_one(shipment_id)
    except StoreError as e:
        raise to_http_exception(e, ENTITY_NAME)


@router.delete(
    "/{shipment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a shipment",
)
def delete_shipment(shipment_id: ShipmentId, db: Session = Depends(get_db)):
    log.debug("REST request to delete Shipment : %s", shipment_id)
    ShipmentService(db).delete(shipment_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_deletion_alert(ENTITY_NAME, shipment_id),
    )

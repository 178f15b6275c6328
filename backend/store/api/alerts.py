"""
Alert headers on REST responses.

Successful mutations carry `X-<app>-alert` (a message key such as
`storeApp.shipment.created`) and `X-<app>-params` (the entity id); failures
carry `X-<app>-error` (`error.<key>`) and `X-<app>-params` (the entity name).
"""

from typing import Dict, List

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from store.config import settings
from store.errors import (
    BadRequestAlertError,
    ConflictingUpdateError,
    EntityNotFoundError,
    InvalidCriteriaError,
)


def _alert(message_key: str, param) -> Dict[str, str]:
    app = settings.APP_NAME
    return {f"X-{app}-alert": message_key, f"X-{app}-params": str(param)}


def alert_header_names() -> List[str]:
    app = settings.APP_NAME
    return [f"X-{app}-alert", f"X-{app}-error", f"X-{app}-params"]


def entity_creation_alert(entity_name: str, entity_id) -> Dict[str, str]:
    return _alert(f"{settings.APP_NAME}.{entity_name}.created", entity_id)


def entity_update_alert(entity_name: str, entity_id) -> Dict[str, str]:
    return _alert(f"{settings.APP_NAME}.{entity_name}.updated", entity_id)


def entity_deletion_alert(entity_name: str, entity_id) -> Dict[str, str]:
    return _alert(f"{settings.APP_NAME}.{entity_name}.deleted", entity_id)


def failure_alert(entity_name: str, error_key: str) -> Dict[str, str]:
    app = settings.APP_NAME
    return {f"X-{app}-error": f"error.{error_key}", f"X-{app}-params": entity_name}


def to_http_exception(exc: Exception, entity_name: str) -> HTTPException:
    if isinstance(exc, BadRequestAlertError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
            headers=failure_alert(exc.entity_name, exc.error_key),
        )
    if isinstance(exc, InvalidCriteriaError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
            headers=failure_alert(entity_name, "badcriteria"),
        )
    if isinstance(exc, IntegrityError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Constraint violation",
            headers=failure_alert(entity_name, "constraintviolation"),
        )
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConflictingUpdateError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
            headers=failure_alert(entity_name, "conflictingupdate"),
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error")

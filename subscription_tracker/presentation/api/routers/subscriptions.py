"""API router for subscription management."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ....application.services.subscription_service import SubscriptionService
from ....core.dependencies import get_request_context, get_subscription_service
from ....domain.errors import PersistenceError
from ....domain.models import INT64_MAX, NIL_UUID, RequestContext, Subscription
from ...api.schemas.subscription import SubscriptionPayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])

INTERNAL_ERROR = "internal server error"


@router.post("/create", status_code=status.HTTP_201_CREATED)
def create_subscription(
    payload: SubscriptionPayload,
    ctx: RequestContext = Depends(get_request_context),
    service: SubscriptionService = Depends(get_subscription_service),
) -> Dict[str, Any]:
    """Create a subscription and return it with its assigned id."""
    try:
        payload.ensure_creatable()
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    try:
        subscription = service.insert(ctx, payload.to_domain())
    except PersistenceError as exc:
        logger.error("failed to insert subscription: %s", exc, extra=ctx.log_extra())
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR) from exc
    return _serialize_subscription(subscription)


@router.get("/list")
def list_subscriptions(
    offset: int = Query(default=0, ge=0, le=INT64_MAX),
    limit: int = Query(default=10, gt=0, le=INT64_MAX),
    ctx: RequestContext = Depends(get_request_context),
    service: SubscriptionService = Depends(get_subscription_service),
) -> List[Dict[str, Any]]:
    """List subscriptions ordered by id."""
    return [_serialize_subscription(item) for item in service.list(ctx, limit, offset)]


@router.get("/get")
def get_subscription(
    user_id: Optional[str] = Query(default=None, description="User ID (UUID)"),
    service_name: Optional[str] = Query(default=None),
    ctx: RequestContext = Depends(get_request_context),
    service: SubscriptionService = Depends(get_subscription_service),
) -> Dict[str, Any]:
    """Get a subscription by user and service name; an unknown key yields a zero-value record."""
    if not user_id or not service_name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="missing user_id or service_name")
    owner = _parse_user_id(user_id)
    try:
        subscription = service.get_by_name_and_user(ctx, service_name, owner)
    except PersistenceError as exc:
        logger.error("failed to get subscription: %s", exc, extra=ctx.log_extra())
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR) from exc
    return _serialize_subscription(subscription or Subscription())


@router.put("/update")
def update_subscription(
    payload: SubscriptionPayload,
    ctx: RequestContext = Depends(get_request_context),
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    """Update price and period of the subscription keyed by name and user."""
    try:
        payload.ensure_updatable()
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    try:
        service.update(ctx, payload.to_domain())
    except PersistenceError as exc:
        logger.error("failed to update subscription: %s", exc, extra=ctx.log_extra())
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR) from exc
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    user_id: Optional[str] = Query(default=None, description="User ID (UUID)"),
    name: Optional[str] = Query(default=None),
    ctx: RequestContext = Depends(get_request_context),
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    if not user_id or not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="missing user_id or name")
    owner = _parse_user_id(user_id)
    try:
        service.delete(ctx, name, owner)
    except PersistenceError as exc:
        logger.error("failed to delete subscription: %s", exc, extra=ctx.log_extra())
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/sum")
def sum_subscription_prices(
    user_id: Optional[str] = Query(default=None, description="User ID (UUID)"),
    service_name: str = Query(default=""),
    start_date: str = Query(default="", description="Start month, YYYY-MM"),
    end_date: str = Query(default="", description="End month, YYYY-MM"),
    ctx: RequestContext = Depends(get_request_context),
    service: SubscriptionService = Depends(get_subscription_service),
) -> Dict[str, int]:
    """Total price of a user's subscriptions over a period."""
    # An omitted user_id sums over the nil UUID, which owns no rows.
    owner = _parse_user_id(user_id) if user_id else NIL_UUID
    try:
        total = service.sum_price(ctx, service_name, owner, start_date, end_date)
    except PersistenceError as exc:
        logger.error("failed to sum subscriptions: %s", exc, extra=ctx.log_extra())
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR) from exc
    return {"total price": total}


def _parse_user_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid user_id") from exc


def _serialize_subscription(subscription: Subscription) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": subscription.id,
        "name": subscription.name,
        "price": subscription.price,
        "user_id": str(subscription.user_id),
        "start_date": subscription.start_date,
    }
    if not subscription.is_open_ended:
        payload["end_date"] = subscription.end_date
    return payload

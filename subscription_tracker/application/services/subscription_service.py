from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from ...domain.models import RequestContext, Subscription
from ...domain.ports.persistence import SubscriptionRepository

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Delegates subscription operations to storage, tracing calls and outcomes."""

    def __init__(self, repository: SubscriptionRepository) -> None:
        self._repository = repository

    def list(self, ctx: RequestContext, limit: int, offset: int) -> List[Subscription]:
        logger.debug("Service.list called limit=%s offset=%s", limit, offset, extra=ctx.log_extra())
        items = self._repository.list(ctx, limit, offset)
        logger.debug("Service.list result count=%s", len(items), extra=ctx.log_extra())
        return items

    def get_by_name_and_user(
        self, ctx: RequestContext, name: str, user_id: UUID
    ) -> Optional[Subscription]:
        logger.debug(
            "Service.get_by_name_and_user called name=%r user_id=%s",
            name,
            user_id,
            extra=ctx.log_extra(),
        )
        try:
            subscription = self._repository.get_by_name_and_user(ctx, name, user_id)
        except Exception as exc:
            logger.error("Service.get_by_name_and_user error: %s", exc, extra=ctx.log_extra())
            raise
        logger.debug("Service.get_by_name_and_user result %r", subscription, extra=ctx.log_extra())
        return subscription

    def insert(self, ctx: RequestContext, subscription: Subscription) -> Subscription:
        logger.debug("Service.insert called %r", subscription, extra=ctx.log_extra())
        try:
            created = self._repository.insert(ctx, subscription)
        except Exception as exc:
            logger.error("Service.insert error: %s", exc, extra=ctx.log_extra())
            raise
        logger.debug("Service.insert successful id=%s", created.id, extra=ctx.log_extra())
        return created

    def update(self, ctx: RequestContext, subscription: Subscription) -> None:
        logger.debug("Service.update called %r", subscription, extra=ctx.log_extra())
        try:
            self._repository.update(ctx, subscription)
        except Exception as exc:
            logger.error("Service.update error: %s", exc, extra=ctx.log_extra())
            raise
        logger.debug("Service.update successful", extra=ctx.log_extra())

    def delete(self, ctx: RequestContext, name: str, user_id: UUID) -> None:
        logger.debug("Service.delete called name=%r user_id=%s", name, user_id, extra=ctx.log_extra())
        try:
            self._repository.delete(ctx, name, user_id)
        except Exception as exc:
            logger.error("Service.delete error: %s", exc, extra=ctx.log_extra())
            raise
        logger.debug("Service.delete successful", extra=ctx.log_extra())

    def sum_price(
        self,
        ctx: RequestContext,
        name: str,
        user_id: UUID,
        start_date: str,
        end_date: str,
    ) -> int:
        logger.debug(
            "Service.sum_price called name=%r user_id=%s start_date=%r end_date=%r",
            name,
            user_id,
            start_date,
            end_date,
            extra=ctx.log_extra(),
        )
        try:
            total = self._repository.sum_price(ctx, name, user_id, start_date, end_date)
        except Exception as exc:
            logger.error("Service.sum_price error: %s", exc, extra=ctx.log_extra())
            raise
        logger.debug("Service.sum_price result total=%s", total, extra=ctx.log_extra())
        return total

from __future__ import annotations

from typing import List, Optional, Protocol
from uuid import UUID

from ..models import RequestContext, Subscription


class SubscriptionRepository(Protocol):
    """Abstract storage for subscription records keyed by ``(name, user_id)``."""

    def list(self, ctx: RequestContext, limit: int, offset: int) -> List[Subscription]:
        ...

    def get_by_name_and_user(
        self, ctx: RequestContext, name: str, user_id: UUID
    ) -> Optional[Subscription]:
        ...

    def insert(self, ctx: RequestContext, subscription: Subscription) -> Subscription:
        ...

    def update(self, ctx: RequestContext, subscription: Subscription) -> None:
        ...

    def delete(self, ctx: RequestContext, name: str, user_id: UUID) -> None:
        ...

    def sum_price(
        self,
        ctx: RequestContext,
        name: str,
        user_id: UUID,
        start_date: str,
        end_date: str,
    ) -> int:
        ...

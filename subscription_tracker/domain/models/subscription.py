"""Subscription domain model for a user's paid service."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

NIL_UUID = UUID(int=0)

# Largest value an integer column or SQL LIMIT/OFFSET accepts.
INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


@dataclass(slots=True)
class Subscription:
    """
    Subscription entity owned by a user.

    Attributes:
        id: Server-assigned identifier, ``0`` until persisted
        name: Name of the subscribed service
        price: Price of the subscription
        user_id: Owning user
        start_date: First month of the subscription (``YYYY-MM``)
        end_date: Last month (``YYYY-MM``) or empty for open-ended subscriptions
    """

    id: int = 0
    name: str = ""
    price: int = 0
    user_id: UUID = field(default=NIL_UUID)
    start_date: str = ""
    end_date: str = ""

    @property
    def is_open_ended(self) -> bool:
        return not self.end_date

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} name={self.name!r} user_id={self.user_id}>"

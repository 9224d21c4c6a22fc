"""Pydantic schemas for subscription API endpoints."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt

from ....domain.models import INT64_MAX, INT64_MIN, NIL_UUID, Subscription

DATE_LENGTH = len("YYYY-MM")


class SubscriptionPayload(BaseModel):
    """Request body shared by the create and update endpoints."""

    name: str = Field(default="", examples=["Premium"])
    price: StrictInt = Field(default=0, ge=INT64_MIN, le=INT64_MAX, examples=[100])
    user_id: UUID = Field(default=NIL_UUID, examples=["11111111-1111-1111-1111-111111111111"])
    start_date: str = Field(default="", examples=["2025-11"])
    end_date: Optional[str] = Field(default=None, examples=["2026-11"])

    def ensure_creatable(self) -> None:
        if len(self.start_date) != DATE_LENGTH or (
            self.end_date and len(self.end_date) != DATE_LENGTH
        ):
            raise ValueError("invalid date format, must be YYYY-MM")

    def ensure_updatable(self) -> None:
        if not self.name or self.price <= 0 or self.user_id == NIL_UUID or not self.start_date:
            raise ValueError("missing or invalid fields")

    def to_domain(self) -> Subscription:
        return Subscription(
            name=self.name,
            price=self.price,
            user_id=self.user_id,
            start_date=self.start_date,
            end_date=self.end_date or "",
        )

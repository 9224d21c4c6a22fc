"""Domain models for the Subscription Tracker application."""

from .request_context import RequestContext
from .subscription import INT64_MAX, INT64_MIN, NIL_UUID, Subscription

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "NIL_UUID",
    "RequestContext",
    "Subscription",
]

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from ..application.services.subscription_service import SubscriptionService
from ..domain.ports.persistence import SubscriptionRepository
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    engine: Engine
    repository: SubscriptionRepository
    subscription_service: SubscriptionService

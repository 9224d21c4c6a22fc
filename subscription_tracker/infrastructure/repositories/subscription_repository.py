"""SQL repository for Subscription persistence."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.expression import ClauseElement, ColumnElement

from ...domain.errors import PersistenceError
from ...domain.models import RequestContext, Subscription
from ...domain.ports.persistence import SubscriptionRepository
from ..persistence.database import subscriptions

logger = logging.getLogger(__name__)

_COLUMNS = (
    subscriptions.c.id,
    subscriptions.c.name,
    subscriptions.c.price,
    subscriptions.c.user_id,
    subscriptions.c.start_date,
    subscriptions.c.end_date,
)


@dataclass(frozen=True, slots=True)
class PriceSumFilter:
    """Criteria of a price aggregation; empty strings disable optional filters."""

    user_id: UUID
    start_date: str
    end_date: str = ""
    name: str = ""


PredicateBuilder = Callable[[PriceSumFilter], Optional[ColumnElement[bool]]]


def _by_user(criteria: PriceSumFilter) -> Optional[ColumnElement[bool]]:
    return subscriptions.c.user_id == criteria.user_id


def _from_start_date(criteria: PriceSumFilter) -> Optional[ColumnElement[bool]]:
    return subscriptions.c.start_date >= criteria.start_date


def _until_end_date(criteria: PriceSumFilter) -> Optional[ColumnElement[bool]]:
    if not criteria.end_date:
        return None
    return subscriptions.c.end_date <= criteria.end_date


def _by_name(criteria: PriceSumFilter) -> Optional[ColumnElement[bool]]:
    if not criteria.name:
        return None
    return subscriptions.c.name == criteria.name


# Applied in order; a builder returning None contributes no predicate.
SUM_PREDICATES: Tuple[PredicateBuilder, ...] = (
    _by_user,
    _from_start_date,
    _until_end_date,
    _by_name,
)


def build_sum_statement(criteria: PriceSumFilter):
    statement = select(func.coalesce(func.sum(subscriptions.c.price), 0)).select_from(subscriptions)
    for build in SUM_PREDICATES:
        clause = build(criteria)
        if clause is not None:
            statement = statement.where(clause)
    return statement


class SqlSubscriptionRepository(SubscriptionRepository):
    """SQLAlchemy Core implementation of the subscription repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list(self, ctx: RequestContext, limit: int, offset: int) -> List[Subscription]:
        """List subscriptions by id; failures are logged and yield an empty list."""
        statement = select(*_COLUMNS).order_by(subscriptions.c.id).limit(limit).offset(offset)
        self._log_statement(ctx, "list", statement)
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(statement).all()
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error("Repository.list: query failed: %s", exc, extra=ctx.log_extra())
            return []
        return [self._row_to_subscription(row) for row in rows]

    def get_by_name_and_user(
        self, ctx: RequestContext, name: str, user_id: UUID
    ) -> Optional[Subscription]:
        statement = select(*_COLUMNS).where(
            subscriptions.c.name == name,
            subscriptions.c.user_id == user_id,
        )
        self._log_statement(ctx, "get_by_name_and_user", statement)
        with self._translate_errors(ctx, "get_by_name_and_user"):
            with self._engine.connect() as conn:
                row = conn.execute(statement).first()

        if row is None:
            logger.info(
                "Repository.get_by_name_and_user: no subscription %r for user %s",
                name,
                user_id,
                extra=ctx.log_extra(),
            )
            return None
        return self._row_to_subscription(row)

    def insert(self, ctx: RequestContext, subscription: Subscription) -> Subscription:
        """Insert a subscription and write the assigned id back into it."""
        statement = insert(subscriptions).values(
            name=subscription.name,
            price=subscription.price,
            user_id=subscription.user_id,
            start_date=subscription.start_date,
            end_date=subscription.end_date,
        )
        self._log_statement(ctx, "insert", statement)
        with self._translate_errors(ctx, "insert"):
            with self._engine.begin() as conn:
                result = conn.execute(statement)
                subscription.id = result.inserted_primary_key[0]
        return subscription

    def update(self, ctx: RequestContext, subscription: Subscription) -> None:
        statement = (
            update(subscriptions)
            .where(
                subscriptions.c.name == subscription.name,
                subscriptions.c.user_id == subscription.user_id,
            )
            .values(
                price=subscription.price,
                start_date=subscription.start_date,
                end_date=subscription.end_date,
            )
        )
        self._log_statement(ctx, "update", statement)
        with self._translate_errors(ctx, "update"):
            with self._engine.begin() as conn:
                conn.execute(statement)

    def delete(self, ctx: RequestContext, name: str, user_id: UUID) -> None:
        statement = delete(subscriptions).where(
            subscriptions.c.name == name,
            subscriptions.c.user_id == user_id,
        )
        self._log_statement(ctx, "delete", statement)
        with self._translate_errors(ctx, "delete"):
            with self._engine.begin() as conn:
                conn.execute(statement)

    def sum_price(
        self,
        ctx: RequestContext,
        name: str,
        user_id: UUID,
        start_date: str,
        end_date: str,
    ) -> int:
        statement = build_sum_statement(
            PriceSumFilter(user_id=user_id, start_date=start_date, end_date=end_date, name=name)
        )
        self._log_statement(ctx, "sum_price", statement)
        with self._translate_errors(ctx, "sum_price"):
            with self._engine.connect() as conn:
                total = conn.execute(statement).scalar_one()
        return int(total)

    @contextmanager
    def _translate_errors(self, ctx: RequestContext, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("Repository.%s: statement failed: %s", operation, exc, extra=ctx.log_extra())
            raise PersistenceError(operation, str(exc)) from exc

    @staticmethod
    def _log_statement(ctx: RequestContext, operation: str, statement: ClauseElement) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        compiled = statement.compile()
        logger.debug(
            "Repository.%s: executing SQL %s args=%s",
            operation,
            " ".join(str(compiled).split()),
            compiled.params,
            extra=ctx.log_extra(),
        )

    @staticmethod
    def _row_to_subscription(row: Row) -> Subscription:
        return Subscription(
            id=row.id,
            name=row.name,
            price=row.price,
            user_id=row.user_id,
            start_date=row.start_date,
            end_date=row.end_date or "",
        )

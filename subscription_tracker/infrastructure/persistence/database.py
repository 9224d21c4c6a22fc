import logging
from pathlib import Path

from sqlalchemy import Column, Index, Integer, MetaData, String, Table, Uuid, create_engine
from sqlalchemy.engine import Engine, make_url

logger = logging.getLogger(__name__)

metadata = MetaData()

subscriptions = Table(
    "subscriptions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("price", Integer, nullable=False),
    Column("user_id", Uuid, nullable=False),
    Column("start_date", String, nullable=False),
    Column("end_date", String, nullable=False, server_default=""),
)

Index("idx_subscriptions_name_user_id", subscriptions.c.name, subscriptions.c.user_id)


def create_database_engine(database_url: str) -> Engine:
    """Create the pooled engine shared by every repository call."""
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        connect_args["check_same_thread"] = False
    engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
    logger.info("Database engine created for %s", url.render_as_string(hide_password=True))
    return engine


def initialize_schema(engine: Engine) -> None:
    """Create the subscriptions table and its lookup index when missing."""
    metadata.create_all(engine)

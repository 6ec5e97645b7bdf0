"""Declarative base plus engine and session factories."""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from notification_dispatch.config import PostgresConfig


class Base(DeclarativeBase):
    pass


def create_db_engine(
    dsn: str,
    *,
    connect_timeout: int | None = None,
    statement_timeout_ms: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Engine for *dsn*. Pooled connections are pinged before reuse
    unless ``pool_pre_ping=False`` is passed.

    The timeouts are handed to the PostgreSQL driver: *connect_timeout*
    bounds connection setup and *statement_timeout_ms* makes the server
    cancel any single query that runs longer.
    """
    kwargs.setdefault("pool_pre_ping", True)
    connect_args = dict(kwargs.pop("connect_args", None) or {})
    if connect_timeout is not None:
        connect_args["connect_timeout"] = connect_timeout
    if statement_timeout_ms is not None:
        connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"
    if connect_args:
        kwargs["connect_args"] = connect_args
    return create_engine(dsn, **kwargs)


def create_postgres_engine(config: PostgresConfig) -> Engine:
    """Engine with every lookup bounded by the configured deadlines."""
    return create_db_engine(
        config.dsn,
        connect_timeout=config.connect_timeout_seconds,
        statement_timeout_ms=int(config.query_timeout_seconds * 1000),
        pool_timeout=config.pool_timeout_seconds,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    # Records are mapped out of the ORM after the session closes.
    return sessionmaker(bind=engine, expire_on_commit=False)

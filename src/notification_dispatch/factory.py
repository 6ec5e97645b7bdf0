"""Wiring of the dispatcher and its collaborators from configuration."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from sqlalchemy import Engine

from notification_dispatch.channels.messaging import MessagingAdapter
from notification_dispatch.channels.push import PushAdapter
from notification_dispatch.config import (
    DispatchConfig,
    MessagingProviderConfig,
    PostgresConfig,
    PushProviderConfig,
)
from notification_dispatch.db.base import create_postgres_engine, create_session_factory
from notification_dispatch.db.directory import SqlHotelDirectory, SqlUserDirectory
from notification_dispatch.delivery_log import SqlDeliveryLog
from notification_dispatch.dispatcher import NotificationDispatcher
from notification_dispatch.providers.messaging import HttpMessagingClient
from notification_dispatch.providers.push import ExpoPushClient
from notification_dispatch.resolver import AdminContactResolver

logger = logging.getLogger(__name__)


@dataclass
class DispatchRuntime:
    """Dispatcher plus the resources that must be released on shutdown."""

    dispatcher: NotificationDispatcher
    resolver: AdminContactResolver
    _closers: list[Callable[[], None]] = field(default_factory=list, repr=False)

    def close(self) -> None:
        for closer in self._closers:
            closer()
        self._closers.clear()
        logger.info("Dispatch runtime closed")


def create_runtime(
    dispatch_config: DispatchConfig | None = None,
    postgres_config: PostgresConfig | None = None,
    push_config: PushProviderConfig | None = None,
    messaging_config: MessagingProviderConfig | None = None,
    engine: Engine | None = None,
) -> DispatchRuntime:
    """Build a ready-to-use dispatcher.

    Configs default to their environment-backed values. Pass *engine* to
    reuse an existing database engine instead of one built from
    ``PostgresConfig``; the runtime then leaves it open on close.
    """
    dispatch_config = dispatch_config or DispatchConfig()

    closers: list[Callable[[], None]] = []
    if engine is None:
        engine = create_postgres_engine(postgres_config or PostgresConfig())
        closers.append(engine.dispose)
    session_factory = create_session_factory(engine)

    users = SqlUserDirectory(session_factory)
    hotels = SqlHotelDirectory(session_factory)
    delivery_log = SqlDeliveryLog(session_factory)

    push_client = ExpoPushClient(push_config or PushProviderConfig())
    messaging_client = HttpMessagingClient(messaging_config or MessagingProviderConfig())
    closers[:0] = [push_client.close, messaging_client.close]

    resolver = AdminContactResolver(users, hotels)
    dispatcher = NotificationDispatcher(
        resolver=resolver,
        push=PushAdapter(users, push_client, delivery_log),
        messaging=MessagingAdapter(users, messaging_client, delivery_log),
        fallback_admin_ids=dispatch_config.system_fallback_admin_ids,
        max_workers=dispatch_config.max_channel_workers,
        channel_timeout=dispatch_config.channel_timeout_seconds,
    )

    logger.info(
        "Dispatch runtime initialized",
        extra={"fallback_admin_count": len(dispatch_config.system_fallback_admin_ids)},
    )
    return DispatchRuntime(dispatcher=dispatcher, resolver=resolver, _closers=closers)

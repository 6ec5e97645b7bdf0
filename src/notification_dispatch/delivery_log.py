"""Append-only delivery log of per-channel outcomes."""

import datetime
import logging
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.orm import Session, sessionmaker

from notification_dispatch.db.models import DeliveryOutcomeRecord
from notification_dispatch.db.repositories import DeliveryOutcomeRepository
from notification_dispatch.enums import Channel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeliveryOutcome:
    """Result of one channel's attempt to notify one recipient."""

    channel: Channel
    event_kind: str
    recipient_directory_id: str | None
    succeeded: bool
    detail: str
    timestamp: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )


class DeliveryLog(Protocol):
    def append(self, outcome: DeliveryOutcome) -> None: ...


class SqlDeliveryLog:
    """Writes outcomes to the delivery_outcomes table, one commit per row."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def append(self, outcome: DeliveryOutcome) -> None:
        with self._session_factory() as session:
            DeliveryOutcomeRepository(session).add(
                DeliveryOutcomeRecord(
                    channel=outcome.channel,
                    event_kind=outcome.event_kind,
                    recipient_directory_id=outcome.recipient_directory_id,
                    succeeded=outcome.succeeded,
                    detail=outcome.detail,
                    recorded_at=outcome.timestamp,
                )
            )
            session.commit()
        logger.debug(
            "Delivery outcome recorded",
            extra={
                "channel": outcome.channel,
                "event_kind": outcome.event_kind,
                "succeeded": outcome.succeeded,
            },
        )

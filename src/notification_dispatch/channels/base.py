"""Shared delivery boundary for channel adapters."""

import logging
from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

from notification_dispatch.delivery_log import DeliveryLog, DeliveryOutcome
from notification_dispatch.directory import UserDirectory
from notification_dispatch.enums import Channel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Outcome of a delivery attempt."""

    success: bool
    details: str


class ChannelAdapter(ABC):
    """Base class for the push and messaging adapters.

    Each public send makes exactly one provider attempt, never raises,
    and appends exactly one outcome to the delivery log.
    """

    channel: ClassVar[Channel]

    def __init__(self, users: UserDirectory, delivery_log: DeliveryLog) -> None:
        self._users = users
        self._delivery_log = delivery_log

    def _attempt(
        self,
        deliver: Callable[[], DeliveryResult],
        *,
        event_kind: str,
        recipient_directory_id: str | None,
    ) -> bool:
        log_ctx = {
            "channel": self.channel,
            "event_kind": event_kind,
            "recipient_directory_id": recipient_directory_id,
        }
        try:
            result = deliver()
        except Exception:
            logger.exception("Channel adapter error", extra=log_ctx)
            result = DeliveryResult(success=False, details="adapter_error")

        if result.success:
            logger.info("Delivery succeeded", extra=log_ctx)
        else:
            logger.warning("Delivery failed", extra={**log_ctx, "reason": result.details})

        self._record(
            DeliveryOutcome(
                channel=self.channel,
                event_kind=str(event_kind),
                recipient_directory_id=recipient_directory_id,
                succeeded=result.success,
                detail=result.details,
            )
        )
        return result.success

    def _record(self, outcome: DeliveryOutcome) -> None:
        try:
            self._delivery_log.append(outcome)
        except Exception:
            logger.exception(
                "Failed to append delivery outcome",
                extra={"channel": outcome.channel, "event_kind": outcome.event_kind},
            )

    def record_failure(
        self, detail: str, *, event_kind: str, recipient_directory_id: str | None
    ) -> bool:
        """Record a failure that happened before the adapter could send.

        Always returns ``False`` so callers can return it directly.
        """
        return self._attempt(
            lambda: DeliveryResult(success=False, details=detail),
            event_kind=event_kind,
            recipient_directory_id=recipient_directory_id,
        )

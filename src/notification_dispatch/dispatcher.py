"""Event dispatcher: recipient selection and multi-channel delivery."""

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass

from notification_dispatch.channels.base import ChannelAdapter
from notification_dispatch.channels.messaging import MessagingAdapter
from notification_dispatch.channels.push import PushAdapter
from notification_dispatch.enums import Channel
from notification_dispatch.events.typed import AdminEvent, AnyNotificationEvent, GuestEvent
from notification_dispatch.phone import normalize
from notification_dispatch.resolver import AdminContactNotResolvedError, AdminContactResolver
from notification_dispatch.templates import render_message, render_push

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Recipient:
    directory_id: str | None = None
    phone: str | None = None


class NotificationDispatcher:
    """Sends one event to its recipient over every enabled channel.

    Guest events go to ``recipient_user_id``. Admin events go to the
    explicit admin hint when one is given, otherwise to the contact
    found by the resolution chain; an exhausted chain fails the whole
    dispatch before any channel is attempted.

    The result is the AND of every attempted channel. Disabled channels
    are left out. Per-channel detail lives in the delivery log only.

    Channels run concurrently and share one *channel_timeout* deadline. A
    channel still running at the deadline counts as failed; its attempt is
    left to finish in the background and records its own outcome.
    """

    def __init__(
        self,
        resolver: AdminContactResolver,
        push: PushAdapter,
        messaging: MessagingAdapter,
        fallback_admin_ids: Sequence[str] = (),
        max_workers: int = 2,
        channel_timeout: float = 30.0,
    ) -> None:
        self._resolver = resolver
        self._push = push
        self._messaging = messaging
        self._fallback_admin_ids = tuple(fallback_admin_ids)
        self._max_workers = max(1, max_workers)
        self._channel_timeout = channel_timeout

    def dispatch(self, event: AnyNotificationEvent) -> bool:
        log_ctx = {
            "event_id": str(event.metadata.event_id),
            "event_kind": str(event.kind),
        }

        channels = event.channels.enabled()
        if not channels:
            logger.warning("All channels disabled, nothing to send", extra=log_ctx)
            return True

        recipient = self._select_recipient(event, log_ctx)
        if recipient is None:
            return False

        outcomes = self._run_channels(event, recipient, channels, log_ctx)
        # TODO: report push-only success separately once product decides
        # whether a guest reached on one channel counts as notified.
        succeeded = all(outcomes.values())

        logger.info(
            "Event dispatched",
            extra={
                **log_ctx,
                "recipient_directory_id": recipient.directory_id,
                "outcomes": {str(channel): ok for channel, ok in outcomes.items()},
                "succeeded": succeeded,
            },
        )
        return succeeded

    def _select_recipient(
        self, event: AnyNotificationEvent, log_ctx: dict[str, str]
    ) -> Recipient | None:
        if isinstance(event, GuestEvent):
            return Recipient(directory_id=event.recipient_user_id)
        return self._select_admin_recipient(event, log_ctx)

    def _select_admin_recipient(
        self, event: AdminEvent, log_ctx: dict[str, str]
    ) -> Recipient | None:
        hint = event.admin_hint
        if hint.is_explicit:
            logger.info(
                "Using explicit admin hint",
                extra={
                    **log_ctx,
                    "has_phone": bool(hint.contact_phone),
                    "directory_id": hint.directory_id,
                },
            )
            phone = hint.contact_phone
            if phone:
                result = normalize(phone)
                if result.valid:
                    phone = result.canonical
                else:
                    logger.warning(
                        "Explicit admin phone failed validation",
                        extra={**log_ctx, "reason": result.reason, "contact_phone": phone},
                    )
            return Recipient(directory_id=hint.directory_id, phone=phone)

        try:
            contact = self._resolver.resolve(
                hotel_id=event.hotel_id,
                fallback_ids=self._fallback_admin_ids,
            )
        except AdminContactNotResolvedError as exc:
            logger.error(
                "Admin contact unresolved, no channel attempted",
                extra={**log_ctx, "hotel_id": event.hotel_id, "attempts": len(exc.attempts)},
            )
            return None

        return Recipient(directory_id=contact.directory_id, phone=contact.canonical_phone)

    def _run_channels(
        self,
        event: AnyNotificationEvent,
        recipient: Recipient,
        channels: list[Channel],
        log_ctx: dict[str, str],
    ) -> dict[Channel, bool]:
        senders: dict[Channel, Callable[[], bool]] = {
            Channel.PUSH: lambda: self._send_push(event, recipient),
            Channel.MESSAGING: lambda: self._send_message(event, recipient),
        }

        workers = min(self._max_workers, len(channels))
        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dispatch")
        try:
            futures = {channel: pool.submit(senders[channel]) for channel in channels}
            deadline = time.monotonic() + self._channel_timeout
            return {
                channel: self._collect(channel, future, deadline, log_ctx)
                for channel, future in futures.items()
            }
        finally:
            # Do not block the caller on a channel that overran the deadline.
            pool.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _collect(
        channel: Channel, future: Future[bool], deadline: float, log_ctx: dict[str, str]
    ) -> bool:
        try:
            return future.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeoutError:
            logger.error("Channel attempt timed out", extra={**log_ctx, "channel": channel})
            return False
        except Exception:
            logger.exception("Channel attempt raised", extra={**log_ctx, "channel": channel})
            return False

    def _send_push(self, event: AnyNotificationEvent, recipient: Recipient) -> bool:
        try:
            content = render_push(event.kind, event.payload)
        except Exception:
            return self._render_failed(self._push, event, recipient)
        return self._push.send(
            recipient.directory_id,
            content.title,
            content.body,
            content.data,
            event_kind=event.kind,
        )

    def _send_message(self, event: AnyNotificationEvent, recipient: Recipient) -> bool:
        try:
            body = render_message(event.kind, event.payload)
        except Exception:
            return self._render_failed(self._messaging, event, recipient)
        if recipient.phone:
            return self._messaging.send(
                recipient.phone,
                body,
                event_kind=event.kind,
                recipient_directory_id=recipient.directory_id,
            )
        return self._messaging.send_to_user(recipient.directory_id, body, event_kind=event.kind)

    @staticmethod
    def _render_failed(
        adapter: ChannelAdapter, event: AnyNotificationEvent, recipient: Recipient
    ) -> bool:
        logger.exception(
            "Template rendering failed",
            extra={
                "event_id": str(event.metadata.event_id),
                "event_kind": str(event.kind),
                "channel": adapter.channel,
            },
        )
        return adapter.record_failure(
            "render_error",
            event_kind=event.kind,
            recipient_directory_id=recipient.directory_id,
        )

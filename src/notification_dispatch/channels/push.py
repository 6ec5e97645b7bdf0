"""Push notification channel adapter."""

from typing import ClassVar

from notification_dispatch.channels.base import ChannelAdapter, DeliveryResult
from notification_dispatch.delivery_log import DeliveryLog
from notification_dispatch.directory import UserDirectory
from notification_dispatch.enums import (
    ADMIN_EVENT_KINDS,
    GUEST_EVENT_KINDS,
    Channel,
    ChannelClass,
)
from notification_dispatch.providers.base import PushMessage, PushProvider

_PUSH_TOKEN_PREFIX = "ExponentPushToken["


def channel_class_for(event_kind: str) -> ChannelClass:
    if event_kind in ADMIN_EVENT_KINDS:
        return ChannelClass.ADMIN
    if event_kind in GUEST_EVENT_KINDS:
        return ChannelClass.BOOKING
    return ChannelClass.DEFAULT


def is_push_address(value: str | None) -> bool:
    return value is not None and value.startswith(_PUSH_TOKEN_PREFIX)


class PushAdapter(ChannelAdapter):
    channel: ClassVar[Channel] = Channel.PUSH

    def __init__(
        self,
        users: UserDirectory,
        provider: PushProvider,
        delivery_log: DeliveryLog,
    ) -> None:
        super().__init__(users, delivery_log)
        self._provider = provider

    def send(
        self,
        directory_id: str | None,
        title: str,
        body: str,
        data: dict[str, str] | None = None,
        *,
        event_kind: str,
    ) -> bool:
        """Push one message to the recipient's registered device.

        Returns False without contacting the provider when the recipient
        has no registered push address.
        """
        return self._attempt(
            lambda: self._deliver(directory_id, title, body, data or {}, event_kind),
            event_kind=event_kind,
            recipient_directory_id=directory_id,
        )

    def _deliver(
        self,
        directory_id: str | None,
        title: str,
        body: str,
        data: dict[str, str],
        event_kind: str,
    ) -> DeliveryResult:
        if not directory_id:
            return DeliveryResult(success=False, details="no_recipient")

        user = self._users.get_user(directory_id)
        if user is None:
            return DeliveryResult(success=False, details="recipient_not_found")
        if not is_push_address(user.push_address):
            return DeliveryResult(success=False, details="no_push_address")

        delivered = self._provider.submit(
            PushMessage(
                address=user.push_address,  # type: ignore[arg-type]
                title=title,
                body=body,
                data=data,
                channel_class=channel_class_for(event_kind),
            )
        )
        return DeliveryResult(
            success=delivered,
            details="delivered" if delivered else "provider_rejected",
        )

"""Text-messaging channel adapter."""

from typing import ClassVar

from notification_dispatch.channels.base import ChannelAdapter, DeliveryResult
from notification_dispatch.delivery_log import DeliveryLog
from notification_dispatch.directory import UserDirectory
from notification_dispatch.enums import Channel
from notification_dispatch.phone import normalize
from notification_dispatch.providers.base import MessagingProvider


class MessagingAdapter(ChannelAdapter):
    """Sends rendered text to canonical phone numbers only.

    A value that does not survive :func:`normalize` unchanged is refused
    before the provider is contacted.
    """

    channel: ClassVar[Channel] = Channel.MESSAGING

    def __init__(
        self,
        users: UserDirectory,
        provider: MessagingProvider,
        delivery_log: DeliveryLog,
    ) -> None:
        super().__init__(users, delivery_log)
        self._provider = provider

    def send(
        self,
        canonical_phone: str | None,
        body: str,
        *,
        event_kind: str,
        recipient_directory_id: str | None = None,
    ) -> bool:
        return self._attempt(
            lambda: self._deliver(canonical_phone, body),
            event_kind=event_kind,
            recipient_directory_id=recipient_directory_id,
        )

    def send_to_user(self, directory_id: str | None, body: str, *, event_kind: str) -> bool:
        """Look up the directory entry's phone, normalize it and send."""
        return self._attempt(
            lambda: self._deliver_to_user(directory_id, body),
            event_kind=event_kind,
            recipient_directory_id=directory_id,
        )

    def _deliver_to_user(self, directory_id: str | None, body: str) -> DeliveryResult:
        if not directory_id:
            return DeliveryResult(success=False, details="no_recipient")

        user = self._users.get_user(directory_id)
        if user is None:
            return DeliveryResult(success=False, details="recipient_not_found")
        if not user.phone:
            return DeliveryResult(success=False, details="no_phone")

        result = normalize(user.phone)
        if not result.valid:
            return DeliveryResult(success=False, details=f"phone_invalid:{result.reason}")
        return self._deliver(result.canonical, body)

    def _deliver(self, canonical_phone: str | None, body: str) -> DeliveryResult:
        if not canonical_phone:
            return DeliveryResult(success=False, details="no_phone")
        if normalize(canonical_phone).canonical != canonical_phone:
            return DeliveryResult(success=False, details="unnormalized_phone")

        delivered = self._provider.submit(canonical_phone, body)
        return DeliveryResult(
            success=delivered,
            details="delivered" if delivered else "provider_rejected",
        )

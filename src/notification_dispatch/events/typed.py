from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from notification_dispatch.enums import AdminEventKind, EventKind, GuestEventKind
from notification_dispatch.events.base import AdminHint, EnabledChannels, EventMetadata
from notification_dispatch.events.payloads import (
    AdminBookingCancelledPayload,
    AdminNewBookingPayload,
    BookingCancelledPayload,
    BookingConfirmedPayload,
    CheckinReminderPayload,
    CheckoutThankYouPayload,
    PaymentSucceededPayload,
)


class _TypedEvent(BaseModel):
    """Common shape of every notification event.

    Subclasses pin ``KIND``; the metadata kind is filled in from it when
    omitted and must match it when given.
    """

    KIND: ClassVar[EventKind]

    model_config = ConfigDict(frozen=True)

    metadata: EventMetadata
    channels: EnabledChannels = Field(default_factory=EnabledChannels)

    @model_validator(mode="before")
    @classmethod
    def _set_event_kind(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            meta = data.get("metadata")
            if meta is None:
                data["metadata"] = {"event_kind": cls.KIND}
            elif isinstance(meta, dict):
                data["metadata"] = {"event_kind": cls.KIND, **meta}
        return data

    @model_validator(mode="after")
    def _check_event_kind(self) -> Self:
        if self.metadata.event_kind != self.KIND:
            raise ValueError(
                f"Expected event_kind={self.KIND!r}, "
                f"got {self.metadata.event_kind!r}"
            )
        return self

    @property
    def kind(self) -> EventKind:
        return self.metadata.event_kind


class GuestEvent(_TypedEvent):
    recipient_user_id: str | None = None


class AdminEvent(_TypedEvent):
    hotel_id: str | None = None
    admin_hint: AdminHint = Field(default_factory=AdminHint)


class BookingConfirmedEvent(GuestEvent):
    KIND: ClassVar[EventKind] = GuestEventKind.BOOKING_CONFIRMED

    payload: BookingConfirmedPayload


class PaymentSucceededEvent(GuestEvent):
    KIND: ClassVar[EventKind] = GuestEventKind.PAYMENT_SUCCEEDED

    payload: PaymentSucceededPayload


class CheckinReminderEvent(GuestEvent):
    KIND: ClassVar[EventKind] = GuestEventKind.CHECKIN_REMINDER

    payload: CheckinReminderPayload


class BookingCancelledEvent(GuestEvent):
    KIND: ClassVar[EventKind] = GuestEventKind.BOOKING_CANCELLED

    payload: BookingCancelledPayload


class CheckoutThankYouEvent(GuestEvent):
    KIND: ClassVar[EventKind] = GuestEventKind.CHECKOUT_THANK_YOU

    payload: CheckoutThankYouPayload


class AdminNewBookingEvent(AdminEvent):
    KIND: ClassVar[EventKind] = AdminEventKind.NEW_BOOKING

    payload: AdminNewBookingPayload


class AdminBookingCancelledEvent(AdminEvent):
    KIND: ClassVar[EventKind] = AdminEventKind.BOOKING_CANCELLED_BY_GUEST

    payload: AdminBookingCancelledPayload


AnyNotificationEvent = (
    BookingConfirmedEvent
    | PaymentSucceededEvent
    | CheckinReminderEvent
    | BookingCancelledEvent
    | CheckoutThankYouEvent
    | AdminNewBookingEvent
    | AdminBookingCancelledEvent
)

_EVENT_REGISTRY: dict[str, type[_TypedEvent]] = {
    GuestEventKind.BOOKING_CONFIRMED: BookingConfirmedEvent,
    GuestEventKind.PAYMENT_SUCCEEDED: PaymentSucceededEvent,
    GuestEventKind.CHECKIN_REMINDER: CheckinReminderEvent,
    GuestEventKind.BOOKING_CANCELLED: BookingCancelledEvent,
    GuestEventKind.CHECKOUT_THANK_YOU: CheckoutThankYouEvent,
    AdminEventKind.NEW_BOOKING: AdminNewBookingEvent,
    AdminEventKind.BOOKING_CANCELLED_BY_GUEST: AdminBookingCancelledEvent,
}


def parse_event(raw: dict[str, Any]) -> AnyNotificationEvent:
    """Deserialize a raw dict into a typed notification event.

    Raises ValueError if metadata.event_kind is missing or unknown.
    """
    try:
        event_kind = raw["metadata"]["event_kind"]
    except (KeyError, TypeError) as exc:
        raise ValueError("Missing metadata.event_kind in raw event") from exc

    event_cls = _EVENT_REGISTRY.get(event_kind)
    if event_cls is None:
        raise ValueError(f"Unknown event kind: {event_kind!r}")

    return event_cls.model_validate(raw)  # type: ignore[return-value]

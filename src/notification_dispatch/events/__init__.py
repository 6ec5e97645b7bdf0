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
from notification_dispatch.events.typed import (
    AdminBookingCancelledEvent,
    AdminEvent,
    AdminNewBookingEvent,
    AnyNotificationEvent,
    BookingCancelledEvent,
    BookingConfirmedEvent,
    CheckinReminderEvent,
    CheckoutThankYouEvent,
    GuestEvent,
    PaymentSucceededEvent,
    parse_event,
)

__all__ = [
    "AdminHint",
    "EnabledChannels",
    "EventMetadata",
    "BookingConfirmedPayload",
    "PaymentSucceededPayload",
    "CheckinReminderPayload",
    "BookingCancelledPayload",
    "CheckoutThankYouPayload",
    "AdminNewBookingPayload",
    "AdminBookingCancelledPayload",
    "GuestEvent",
    "AdminEvent",
    "BookingConfirmedEvent",
    "PaymentSucceededEvent",
    "CheckinReminderEvent",
    "BookingCancelledEvent",
    "CheckoutThankYouEvent",
    "AdminNewBookingEvent",
    "AdminBookingCancelledEvent",
    "AnyNotificationEvent",
    "parse_event",
]

from enum import StrEnum


class GuestEventKind(StrEnum):
    BOOKING_CONFIRMED = "booking.confirmed"
    PAYMENT_SUCCEEDED = "payment.succeeded"
    CHECKIN_REMINDER = "checkin.reminder"
    BOOKING_CANCELLED = "booking.cancelled"
    CHECKOUT_THANK_YOU = "checkout.thank_you"


class AdminEventKind(StrEnum):
    NEW_BOOKING = "admin.new_booking"
    BOOKING_CANCELLED_BY_GUEST = "admin.booking_cancelled_by_guest"


EventKind = GuestEventKind | AdminEventKind

GUEST_EVENT_KINDS: frozenset[str] = frozenset(e.value for e in GuestEventKind)
ADMIN_EVENT_KINDS: frozenset[str] = frozenset(e.value for e in AdminEventKind)
ALL_EVENT_KINDS: frozenset[str] = GUEST_EVENT_KINDS | ADMIN_EVENT_KINDS


class Channel(StrEnum):
    PUSH = "push"
    MESSAGING = "messaging"


class ChannelClass(StrEnum):
    """Provider-side classification used for delivery prioritization."""

    BOOKING = "booking"
    ADMIN = "admin"
    DEFAULT = "default"


class RejectionReason(StrEnum):
    EMPTY = "empty"
    INVALID_LENGTH = "invalid_length"
    INVALID_LEADING_DIGIT = "invalid_leading_digit"
    REPEATED_DIGITS = "repeated_digits"
    SEQUENTIAL_DIGITS = "sequential_digits"


class LookupFailure(StrEnum):
    NOT_FOUND = "not_found"
    PHONE_MISSING = "phone_missing"
    PHONE_INVALID = "phone_invalid"
    LOOKUP_ERROR = "lookup_error"
    HOTEL_NOT_FOUND = "hotel_not_found"
    HOTEL_ADMIN_MISSING = "hotel_admin_missing"


class ResolutionStrategy(StrEnum):
    DIRECT = "direct"
    HOTEL = "hotel"
    FALLBACK = "fallback"

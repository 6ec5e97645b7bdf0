import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class _BookingPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    hotel_name: str
    guest_name: str
    booking_id: str | None = None
    hotel_id: str | None = None


class BookingConfirmedPayload(_BookingPayload):
    room_type: str
    check_in: datetime.date
    check_out: datetime.date
    total_amount: Decimal
    guests: int = 1
    nights: int | None = None
    special_requests: str | None = None


class PaymentSucceededPayload(_BookingPayload):
    check_in: datetime.date
    amount: Decimal
    payment_id: str | None = None


class CheckinReminderPayload(_BookingPayload):
    room_type: str
    check_in: datetime.date
    check_in_time: str | None = None


class BookingCancelledPayload(_BookingPayload):
    check_in: datetime.date
    cancellation_reason: str | None = None


class CheckoutThankYouPayload(_BookingPayload):
    pass


class AdminNewBookingPayload(_BookingPayload):
    guest_phone: str
    room_type: str
    check_in: datetime.date
    check_out: datetime.date
    total_amount: Decimal
    guests: int = 1
    special_requests: str | None = None


class AdminBookingCancelledPayload(_BookingPayload):
    guest_phone: str
    room_type: str
    check_in: datetime.date
    check_out: datetime.date
    total_amount: Decimal
    guests: int = 1
    cancellation_reason: str | None = None
    cancelled_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

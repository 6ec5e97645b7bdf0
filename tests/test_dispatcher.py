"""Tests for NotificationDispatcher: recipient selection and channel fan-out."""

import threading
import time
from unittest.mock import MagicMock, patch

import pytest
from jinja2 import UndefinedError

from notification_dispatch.channels import MessagingAdapter, PushAdapter
from notification_dispatch.dispatcher import NotificationDispatcher
from notification_dispatch.enums import Channel
from notification_dispatch.events import (
    AdminHint,
    AdminNewBookingEvent,
    BookingConfirmedEvent,
    EnabledChannels,
    parse_event,
)
from notification_dispatch.resolver import AdminContactResolver


@pytest.fixture()
def dispatcher(resolver, push_adapter, messaging_adapter) -> NotificationDispatcher:
    return NotificationDispatcher(
        resolver=resolver,
        push=push_adapter,
        messaging=messaging_adapter,
        fallback_admin_ids=["U_FALLBACK"],
    )


@pytest.fixture()
def mock_adapters() -> tuple[MagicMock, MagicMock]:
    push = MagicMock(spec=PushAdapter)
    push.send.return_value = True
    messaging = MagicMock(spec=MessagingAdapter)
    messaging.send.return_value = True
    messaging.send_to_user.return_value = True
    return push, messaging


class TestGuestEvents:
    def test_both_channels_succeed(
        self, dispatcher, booking_payload, mock_push_provider, mock_messaging_provider,
        delivery_log,
    ) -> None:
        event = BookingConfirmedEvent(recipient_user_id="U1", payload=booking_payload)

        assert dispatcher.dispatch(event) is True

        push_message = mock_push_provider.submit.call_args.args[0]
        assert push_message.title == "🎉 Booking Confirmed!"
        assert push_message.data["kind"] == "booking.confirmed"
        phone, body = mock_messaging_provider.submit.call_args.args
        assert phone == "919876543210"
        assert "Dear Asha," in body
        assert {o.channel for o in delivery_log.outcomes} == {Channel.PUSH, Channel.MESSAGING}

    def test_push_failure_still_attempts_messaging(
        self, dispatcher, booking_payload, mock_push_provider, mock_messaging_provider
    ) -> None:
        mock_push_provider.submit.return_value = False
        event = BookingConfirmedEvent(recipient_user_id="U1", payload=booking_payload)

        assert dispatcher.dispatch(event) is False
        mock_messaging_provider.submit.assert_called_once()

    def test_messaging_exception_still_attempts_push(
        self, dispatcher, booking_payload, mock_push_provider, mock_messaging_provider
    ) -> None:
        mock_messaging_provider.submit.side_effect = ConnectionError("refused")
        event = BookingConfirmedEvent(recipient_user_id="U1", payload=booking_payload)

        assert dispatcher.dispatch(event) is False
        mock_push_provider.submit.assert_called_once()

    def test_adapter_raising_counts_as_failure(
        self, resolver, mock_adapters, booking_payload
    ) -> None:
        push, messaging = mock_adapters
        push.send.side_effect = RuntimeError("unexpected")
        dispatcher = NotificationDispatcher(resolver, push, messaging)
        event = BookingConfirmedEvent(recipient_user_id="U1", payload=booking_payload)

        assert dispatcher.dispatch(event) is False
        messaging.send_to_user.assert_called_once()

    def test_missing_recipient_fails_both_channels(
        self, dispatcher, booking_payload, delivery_log
    ) -> None:
        event = BookingConfirmedEvent(payload=booking_payload)

        assert dispatcher.dispatch(event) is False
        assert [o.detail for o in delivery_log.outcomes] == ["no_recipient", "no_recipient"]

    def test_disabled_channel_is_not_attempted(
        self, dispatcher, booking_payload, mock_push_provider, mock_messaging_provider
    ) -> None:
        mock_messaging_provider.submit.return_value = False
        event = BookingConfirmedEvent(
            recipient_user_id="U1",
            payload=booking_payload,
            channels=EnabledChannels(messaging=False),
        )

        assert dispatcher.dispatch(event) is True
        mock_push_provider.submit.assert_called_once()
        mock_messaging_provider.submit.assert_not_called()

    def test_all_channels_disabled(
        self, dispatcher, booking_payload, mock_push_provider, mock_messaging_provider,
        delivery_log,
    ) -> None:
        event = BookingConfirmedEvent(
            recipient_user_id="U1",
            payload=booking_payload,
            channels=EnabledChannels(push=False, messaging=False),
        )

        assert dispatcher.dispatch(event) is True
        mock_push_provider.submit.assert_not_called()
        mock_messaging_provider.submit.assert_not_called()
        assert delivery_log.outcomes == []

    def test_single_worker_runs_every_channel(
        self, resolver, push_adapter, messaging_adapter, booking_payload, delivery_log
    ) -> None:
        dispatcher = NotificationDispatcher(
            resolver, push_adapter, messaging_adapter, max_workers=1
        )
        event = BookingConfirmedEvent(recipient_user_id="U1", payload=booking_payload)

        assert dispatcher.dispatch(event) is True
        assert len(delivery_log.outcomes) == 2


class TestAdminEvents:
    def test_hotel_admin_resolved_end_to_end(
        self, dispatcher, mock_push_provider, mock_messaging_provider
    ) -> None:
        event = parse_event(
            {
                "metadata": {"event_kind": "admin.new_booking"},
                "hotel_id": "H1",
                "payload": {
                    "hotel_name": "Sea View",
                    "guest_name": "Asha",
                    "guest_phone": "9123456780",
                    "room_type": "Deluxe",
                    "check_in": "2026-01-15",
                    "check_out": "2026-01-17",
                    "total_amount": "4500.00",
                },
            }
        )

        assert dispatcher.dispatch(event) is True

        mock_messaging_provider.submit.assert_called_once()
        assert mock_messaging_provider.submit.call_args.args[0] == "919876543210"
        assert mock_push_provider.submit.call_args.args[0].title == "🔔 New Booking Alert"

    def test_configured_fallback_used_when_hotel_admin_has_no_phone(
        self, dispatcher, admin_booking_payload, mock_messaging_provider, delivery_log
    ) -> None:
        event = AdminNewBookingEvent(hotel_id="H_ADMIN_NOPHONE", payload=admin_booking_payload)

        dispatcher.dispatch(event)

        mock_messaging_provider.submit.assert_called_once()
        assert mock_messaging_provider.submit.call_args.args[0] == "919123456780"
        assert {o.recipient_directory_id for o in delivery_log.outcomes} == {"U_FALLBACK"}

    def test_unresolved_admin_attempts_no_channel(
        self, users, hotels, mock_adapters, admin_booking_payload
    ) -> None:
        push, messaging = mock_adapters
        dispatcher = NotificationDispatcher(AdminContactResolver(users, hotels), push, messaging)
        event = AdminNewBookingEvent(hotel_id="H_NO_ADMIN", payload=admin_booking_payload)

        assert dispatcher.dispatch(event) is False
        push.send.assert_not_called()
        messaging.send.assert_not_called()
        messaging.send_to_user.assert_not_called()

    def test_explicit_hint_bypasses_resolver(self, mock_adapters, admin_booking_payload) -> None:
        push, messaging = mock_adapters
        resolver = MagicMock(spec=AdminContactResolver)
        dispatcher = NotificationDispatcher(resolver, push, messaging)
        event = AdminNewBookingEvent(
            hotel_id="H1",
            admin_hint=AdminHint(contact_phone="+91 98765 43210", directory_id="U9"),
            payload=admin_booking_payload,
        )

        assert dispatcher.dispatch(event) is True
        resolver.resolve.assert_not_called()
        assert push.send.call_args.args[0] == "U9"
        assert messaging.send.call_args.args[0] == "919876543210"
        assert messaging.send.call_args.kwargs["recipient_directory_id"] == "U9"

    def test_explicit_invalid_phone_is_refused(
        self, resolver, push_adapter, messaging_adapter, admin_booking_payload,
        mock_messaging_provider, delivery_log,
    ) -> None:
        dispatcher = NotificationDispatcher(resolver, push_adapter, messaging_adapter)
        event = AdminNewBookingEvent(
            admin_hint=AdminHint(contact_phone="9999999999", directory_id="U9"),
            payload=admin_booking_payload,
        )

        assert dispatcher.dispatch(event) is False
        mock_messaging_provider.submit.assert_not_called()
        details = {o.channel: o.detail for o in delivery_log.outcomes}
        assert details == {Channel.PUSH: "delivered", Channel.MESSAGING: "unnormalized_phone"}

    def test_phone_only_hint_with_push_disabled(
        self, dispatcher, admin_booking_payload, mock_messaging_provider
    ) -> None:
        event = AdminNewBookingEvent(
            admin_hint=AdminHint(contact_phone="09876543210"),
            channels=EnabledChannels(push=False),
            payload=admin_booking_payload,
        )

        assert dispatcher.dispatch(event) is True
        mock_messaging_provider.submit.assert_called_once()
        assert mock_messaging_provider.submit.call_args.args[0] == "919876543210"


class TestChannelFailures:
    def test_hung_channel_hits_deadline(self, resolver, mock_adapters, booking_payload) -> None:
        push, messaging = mock_adapters
        release = threading.Event()
        push.send.side_effect = lambda *args, **kwargs: release.wait(5)
        dispatcher = NotificationDispatcher(resolver, push, messaging, channel_timeout=0.2)
        event = BookingConfirmedEvent(recipient_user_id="U1", payload=booking_payload)

        started = time.monotonic()
        try:
            assert dispatcher.dispatch(event) is False
            assert time.monotonic() - started < 2
        finally:
            release.set()
        messaging.send_to_user.assert_called_once()

    def test_render_error_is_recorded_for_its_channel(
        self, dispatcher, booking_payload, mock_push_provider, mock_messaging_provider,
        delivery_log,
    ) -> None:
        event = BookingConfirmedEvent(recipient_user_id="U1", payload=booking_payload)

        with patch(
            "notification_dispatch.dispatcher.render_push",
            side_effect=UndefinedError("'guest_name' is undefined"),
        ):
            assert dispatcher.dispatch(event) is False

        mock_push_provider.submit.assert_not_called()
        mock_messaging_provider.submit.assert_called_once()
        by_channel = {o.channel: o for o in delivery_log.outcomes}
        assert by_channel[Channel.PUSH].succeeded is False
        assert by_channel[Channel.PUSH].detail == "render_error"
        assert by_channel[Channel.PUSH].recipient_directory_id == "U1"
        assert by_channel[Channel.MESSAGING].succeeded is True

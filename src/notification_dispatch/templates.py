"""Fixed per-kind message templates for the push and messaging channels.

Template selection is keyed on the event kind alone. Unknown kinds get a
generic template instead of an error.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from notification_dispatch.enums import AdminEventKind, GuestEventKind
from notification_dispatch.renderer import render_template

_GUEST_SIGN_OFF = "*Helpkey Team* 🏨✨"
_ADMIN_SIGN_OFF = "*Helpkey Hotel Management* 🏨"


@dataclass(frozen=True, slots=True)
class KindTemplates:
    push_title: str
    push_body: str
    screen: str
    message: str


@dataclass(frozen=True, slots=True)
class PushContent:
    title: str
    body: str
    data: dict[str, str]


_TEMPLATES: dict[str, KindTemplates] = {
    GuestEventKind.BOOKING_CONFIRMED: KindTemplates(
        push_title="🎉 Booking Confirmed!",
        push_body=(
            "Your booking at {{ hotel_name }} has been confirmed. "
            "Check-in: {{ check_in }}"
        ),
        screen="BookingDetails",
        message=f"""\
🎉 *Booking Confirmed!*

Dear {{{{ guest_name }}}},

Your booking has been confirmed! Here are the details:

🏨 *Hotel:* {{{{ hotel_name }}}}
🛏️ *Room:* {{{{ room_type }}}}
📅 *Check-in:* {{{{ check_in }}}}
📅 *Check-out:* {{{{ check_out }}}}
👥 *Guests:* {{{{ guests }}}}
{{% if nights %}}
🌙 *Nights:* {{{{ nights }}}}
{{% endif %}}
💰 *Total Amount:* ₹{{{{ total_amount }}}}
{{% if booking_id %}}
🆔 *Booking ID:* {{{{ booking_id }}}}
{{% endif %}}
{{% if special_requests %}}

📝 *Special Requests:* {{{{ special_requests }}}}
{{% endif %}}

Thank you for choosing us! We look forward to hosting you.

For any queries, please contact our support team.

{_GUEST_SIGN_OFF}""",
    ),
    GuestEventKind.PAYMENT_SUCCEEDED: KindTemplates(
        push_title="💳 Payment Successful",
        push_body=(
            "Payment of ₹{{ amount }} received for {{ hotel_name }}. "
            "Booking confirmed!"
        ),
        screen="BookingDetails",
        message=f"""\
✅ *Payment Successful!*

Dear {{{{ guest_name }}}},

Your payment has been processed successfully!

💳 *Payment Details:*
{{% if payment_id %}}
🆔 Payment ID: {{{{ payment_id }}}}
{{% endif %}}
💰 Amount Paid: ₹{{{{ amount }}}}
🏨 Hotel: {{{{ hotel_name }}}}
📅 Check-in: {{{{ check_in }}}}

Your booking is now confirmed. You'll receive a separate confirmation message with all booking details.

{_GUEST_SIGN_OFF}""",
    ),
    GuestEventKind.CHECKIN_REMINDER: KindTemplates(
        push_title="⏰ Check-in Reminder",
        push_body=(
            "Don't forget! Your check-in at {{ hotel_name }} is tomorrow"
            "{% if check_in_time %} at {{ check_in_time }}{% endif %}."
        ),
        screen="BookingDetails",
        message=f"""\
⏰ *Check-in Reminder*

Dear {{{{ guest_name }}}},

This is a friendly reminder that your check-in is tomorrow!

🏨 *Hotel:* {{{{ hotel_name }}}}
📅 *Check-in:* {{{{ check_in }}}}{{% if check_in_time %}} {{{{ check_in_time }}}}{{% endif %}}

🛏️ *Room:* {{{{ room_type }}}}
{{% if booking_id %}}
🆔 *Booking ID:* {{{{ booking_id }}}}
{{% endif %}}

📋 *What to bring:*
• Valid ID proof
• Booking confirmation
• Payment receipt

We're excited to welcome you!

{_GUEST_SIGN_OFF}""",
    ),
    GuestEventKind.BOOKING_CANCELLED: KindTemplates(
        push_title="❌ Booking Cancelled",
        push_body=(
            "Your booking at {{ hotel_name }} has been cancelled. "
            "Refund will be processed soon."
        ),
        screen="BookingDetails",
        message=f"""\
❌ *Booking Cancelled*

Dear {{{{ guest_name }}}},

Your booking has been cancelled.

🏨 *Hotel:* {{{{ hotel_name }}}}
📅 *Check-in Date:* {{{{ check_in }}}}
{{% if booking_id %}}
🆔 *Booking ID:* {{{{ booking_id }}}}
{{% endif %}}
{{% if cancellation_reason %}}
📝 *Reason:* {{{{ cancellation_reason }}}}
{{% endif %}}

If you have any questions about refunds or need assistance with a new booking, please contact our support team.

We hope to serve you in the future!

{_GUEST_SIGN_OFF}""",
    ),
    GuestEventKind.CHECKOUT_THANK_YOU: KindTemplates(
        push_title="🙏 Thank You!",
        push_body=(
            "Thank you for staying at {{ hotel_name }}. "
            "We hope you had a great experience!"
        ),
        screen="ReviewScreen",
        message=f"""\
🙏 *Thank You for Staying with Us!*

Dear {{{{ guest_name }}}},

We hope you had a wonderful stay at {{{{ hotel_name }}}}!

⭐ *Rate Your Experience:*
We'd love to hear about your stay. Please take a moment to rate and review your experience.

Thank you for choosing Helpkey. We look forward to welcoming you again soon!

{_GUEST_SIGN_OFF}""",
    ),
    AdminEventKind.NEW_BOOKING: KindTemplates(
        push_title="🔔 New Booking Alert",
        push_body=(
            "New booking received for {{ hotel_name }} by {{ guest_name }}. "
            "Amount: ₹{{ total_amount }}"
        ),
        screen="AdminDashboard",
        message=f"""\
🔔 *New Booking Alert*

A new booking has been received for your hotel!

👤 *Guest:* {{{{ guest_name }}}}
📱 *Guest Phone:* {{{{ guest_phone }}}}
🏨 *Hotel:* {{{{ hotel_name }}}}
🛏️ *Room:* {{{{ room_type }}}}
📅 *Check-in:* {{{{ check_in }}}}
📅 *Check-out:* {{{{ check_out }}}}
👥 *Guests:* {{{{ guests }}}}
💰 *Amount:* ₹{{{{ total_amount }}}}
{{% if booking_id %}}
🆔 *Booking ID:* {{{{ booking_id }}}}
{{% endif %}}
{{% if special_requests %}}

📝 *Special Requests:* {{{{ special_requests }}}}
{{% endif %}}

Please ensure the booking is processed and the guest is contacted if needed.

{_ADMIN_SIGN_OFF}""",
    ),
    AdminEventKind.BOOKING_CANCELLED_BY_GUEST: KindTemplates(
        push_title="⚠️ Booking Cancelled by Guest",
        push_body=(
            "Booking{% if booking_id %} #{{ booking_id }}{% endif %} at "
            "{{ hotel_name }} was cancelled by {{ guest_name }}"
        ),
        screen="AdminDashboard",
        message=f"""\
❌ *Booking Cancelled by Guest*

A guest has cancelled their booking at your hotel.

👤 *Guest:* {{{{ guest_name }}}}
📱 *Guest Phone:* {{{{ guest_phone }}}}
🏨 *Hotel:* {{{{ hotel_name }}}}
🛏️ *Room:* {{{{ room_type }}}}
📅 *Check-in:* {{{{ check_in }}}}
📅 *Check-out:* {{{{ check_out }}}}
👥 *Guests:* {{{{ guests }}}}
💰 *Amount:* ₹{{{{ total_amount }}}}
{{% if booking_id %}}
🆔 *Booking ID:* {{{{ booking_id }}}}
{{% endif %}}
{{% if cancellation_reason %}}

📝 *Cancellation Reason:* {{{{ cancellation_reason }}}}
{{% endif %}}

⏰ *Cancelled:* {{{{ cancelled_at.strftime("%d/%m/%Y, %H:%M") }}}}

💡 *Action Required:*
• Update room availability
• Process any refunds if applicable
• Contact guest if needed

{_ADMIN_SIGN_OFF}""",
    ),
}

FALLBACK_TEMPLATES = KindTemplates(
    push_title="Helpkey Notification",
    push_body="You have a new notification",
    screen="Notifications",
    message=f"You have a new notification from Helpkey.\n\n{_GUEST_SIGN_OFF}",
)


def templates_for(kind: str) -> KindTemplates:
    return _TEMPLATES.get(kind, FALLBACK_TEMPLATES)


def render_push(kind: str, payload: BaseModel | Mapping[str, Any]) -> PushContent:
    """Render the push title, body and client data for *kind*."""
    templates = templates_for(kind)
    context = _context(payload)
    data = {"kind": str(kind), "screen": templates.screen}
    for key in ("booking_id", "hotel_id"):
        if context.get(key):
            data[key] = str(context[key])
    return PushContent(
        title=render_template(templates.push_title, context),
        body=render_template(templates.push_body, context),
        data=data,
    )


def render_message(kind: str, payload: BaseModel | Mapping[str, Any]) -> str:
    """Render the multi-line messaging body for *kind*."""
    return render_template(templates_for(kind).message, _context(payload))


def _context(payload: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump()
    return dict(payload)

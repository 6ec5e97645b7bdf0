"""Channel adapters: recipient address lookup plus one provider attempt."""

from notification_dispatch.channels.base import ChannelAdapter, DeliveryResult
from notification_dispatch.channels.messaging import MessagingAdapter
from notification_dispatch.channels.push import PushAdapter, channel_class_for

__all__ = [
    "ChannelAdapter",
    "DeliveryResult",
    "MessagingAdapter",
    "PushAdapter",
    "channel_class_for",
]

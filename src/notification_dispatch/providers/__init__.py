"""External delivery providers."""

from notification_dispatch.providers.base import MessagingProvider, PushMessage, PushProvider
from notification_dispatch.providers.messaging import HttpMessagingClient
from notification_dispatch.providers.push import ExpoPushClient, decode_push_response

__all__ = [
    "ExpoPushClient",
    "HttpMessagingClient",
    "MessagingProvider",
    "PushMessage",
    "PushProvider",
    "decode_push_response",
]

"""External provider interfaces for the push and messaging channels."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from notification_dispatch.enums import ChannelClass


@dataclass(frozen=True, slots=True)
class PushMessage:
    address: str
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)
    channel_class: ChannelClass = ChannelClass.DEFAULT


class PushProvider(ABC):
    """Submits one message to the external push service."""

    @abstractmethod
    def submit(self, message: PushMessage) -> bool:
        """Return True only when the provider explicitly reports success.

        May raise on transport failure; callers own the exception boundary.
        """


class MessagingProvider(ABC):
    """Submits one text message to the external messaging service."""

    @abstractmethod
    def submit(self, canonical_phone: str, body: str) -> bool:
        """Return the provider's boolean status.

        May raise on transport failure; callers own the exception boundary.
        """

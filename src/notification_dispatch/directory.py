"""Read-only views of the user directory and hotel records."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UserRecord:
    directory_id: str
    phone: str | None = None
    push_address: str | None = None
    display_name: str | None = None
    role: str | None = None


@dataclass(frozen=True, slots=True)
class HotelRecord:
    hotel_id: str
    designated_admin_id: str | None = None
    owner_id: str | None = None
    name: str | None = None
    location: str | None = None

    @property
    def admin_id(self) -> str | None:
        """Designated administrator, or the owner when none is designated."""
        return self.designated_admin_id or self.owner_id


class UserDirectory(Protocol):
    def get_user(self, directory_id: str) -> UserRecord | None:
        """Return the directory entry, or None if it does not exist."""
        ...


class HotelDirectory(Protocol):
    def get_hotel(self, hotel_id: str) -> HotelRecord | None:
        """Return the hotel record, or None if it does not exist."""
        ...

"""Data access repositories with constructor-injected sessions."""

from sqlalchemy.orm import Session

from notification_dispatch.db.models import DeliveryOutcomeRecord, DirectoryUser, Hotel


class DeliveryOutcomeRepository:
    """Append-only access to the delivery_outcomes table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, record: DeliveryOutcomeRecord) -> DeliveryOutcomeRecord:
        """Add a new outcome row and flush to assign its id."""
        self._session.add(record)
        self._session.flush()
        return record


class UserRepository:
    """Read-only access to directory users."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: str) -> DirectoryUser | None:
        return self._session.get(DirectoryUser, user_id)


class HotelRepository:
    """Read-only access to hotel records."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, hotel_id: str) -> Hotel | None:
        return self._session.get(Hotel, hotel_id)

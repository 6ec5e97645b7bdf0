"""Shared test fixtures: SQLite in-memory database and in-memory directories."""

import datetime
from collections.abc import Generator
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from notification_dispatch.channels import MessagingAdapter, PushAdapter
from notification_dispatch.db.base import Base
from notification_dispatch.delivery_log import DeliveryOutcome
from notification_dispatch.directory import HotelRecord, UserRecord
from notification_dispatch.events import (
    AdminNewBookingPayload,
    BookingConfirmedPayload,
)
from notification_dispatch.providers.base import MessagingProvider, PushProvider
from notification_dispatch.resolver import AdminContactResolver

PUSH_TOKEN = "ExponentPushToken[xxxxxxxxxxxxxxxxxxxxxx]"


class InMemoryUserDirectory:
    def __init__(self, *users: UserRecord) -> None:
        self.users = {u.directory_id: u for u in users}
        self.lookups: list[str] = []

    def get_user(self, directory_id: str) -> UserRecord | None:
        self.lookups.append(directory_id)
        return self.users.get(directory_id)


class InMemoryHotelDirectory:
    def __init__(self, *hotels: HotelRecord) -> None:
        self.hotels = {h.hotel_id: h for h in hotels}
        self.lookups: list[str] = []

    def get_hotel(self, hotel_id: str) -> HotelRecord | None:
        self.lookups.append(hotel_id)
        return self.hotels.get(hotel_id)


class RecordingDeliveryLog:
    def __init__(self) -> None:
        self.outcomes: list[DeliveryOutcome] = []

    def append(self, outcome: DeliveryOutcome) -> None:
        self.outcomes.append(outcome)


@pytest.fixture(scope="session")
def db_engine() -> Engine:
    """Create a single in-memory SQLite engine for the test session."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def db_session(db_engine: Engine) -> Generator[Session, None, None]:
    """Transactional session that rolls back after each test."""
    connection = db_engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection)

    yield session

    session.close()
    if transaction.is_active:
        transaction.rollback()
    connection.close()


@pytest.fixture()
def session_factory(db_session: Session) -> MagicMock:
    """Session factory that always returns the test session.

    Wraps db_session so that ``with session_factory() as session:``
    returns our transactional test session.
    """
    factory = MagicMock(spec=sessionmaker)
    ctx = MagicMock()
    ctx.__enter__ = MagicMock(return_value=db_session)
    ctx.__exit__ = MagicMock(return_value=False)
    factory.return_value = ctx
    return factory


@pytest.fixture()
def users() -> InMemoryUserDirectory:
    return InMemoryUserDirectory(
        UserRecord(
            directory_id="U1",
            phone="98765 43210",
            push_address=PUSH_TOKEN,
            display_name="Asha Guest",
            role="user",
        ),
        UserRecord(
            directory_id="U9",
            phone="09876543210",
            push_address=PUSH_TOKEN,
            display_name="Hotel Admin",
            role="admin",
        ),
        UserRecord(directory_id="U_NOPHONE", push_address=PUSH_TOKEN, role="admin"),
        UserRecord(directory_id="U_BADPHONE", phone="1111111111", role="admin"),
        UserRecord(directory_id="U_FALLBACK", phone="+91 91234 56780", role="admin"),
    )


@pytest.fixture()
def hotels() -> InMemoryHotelDirectory:
    return InMemoryHotelDirectory(
        HotelRecord(hotel_id="H1", designated_admin_id="U9", owner_id="U1", name="Sea View"),
        HotelRecord(hotel_id="H_OWNER_ONLY", owner_id="U9", name="Hill Top"),
        HotelRecord(hotel_id="H_NO_ADMIN", name="Orphan Inn"),
        HotelRecord(hotel_id="H_ADMIN_NOPHONE", designated_admin_id="U_NOPHONE"),
    )


@pytest.fixture()
def delivery_log() -> RecordingDeliveryLog:
    return RecordingDeliveryLog()


@pytest.fixture()
def resolver(
    users: InMemoryUserDirectory, hotels: InMemoryHotelDirectory
) -> AdminContactResolver:
    return AdminContactResolver(users, hotels)


@pytest.fixture()
def mock_push_provider() -> MagicMock:
    """Push provider that always accepts."""
    provider = MagicMock(spec=PushProvider)
    provider.submit.return_value = True
    return provider


@pytest.fixture()
def mock_messaging_provider() -> MagicMock:
    """Messaging provider that always accepts."""
    provider = MagicMock(spec=MessagingProvider)
    provider.submit.return_value = True
    return provider


@pytest.fixture()
def push_adapter(
    users: InMemoryUserDirectory,
    mock_push_provider: MagicMock,
    delivery_log: RecordingDeliveryLog,
) -> PushAdapter:
    return PushAdapter(users, mock_push_provider, delivery_log)


@pytest.fixture()
def messaging_adapter(
    users: InMemoryUserDirectory,
    mock_messaging_provider: MagicMock,
    delivery_log: RecordingDeliveryLog,
) -> MessagingAdapter:
    return MessagingAdapter(users, mock_messaging_provider, delivery_log)


@pytest.fixture()
def booking_payload() -> BookingConfirmedPayload:
    return BookingConfirmedPayload(
        hotel_name="Sea View",
        guest_name="Asha",
        booking_id="B42",
        hotel_id="H1",
        room_type="Deluxe",
        check_in=datetime.date(2026, 1, 15),
        check_out=datetime.date(2026, 1, 17),
        total_amount=Decimal("4500.00"),
        guests=2,
    )


@pytest.fixture()
def admin_booking_payload() -> AdminNewBookingPayload:
    return AdminNewBookingPayload(
        hotel_name="Sea View",
        guest_name="Asha",
        guest_phone="9876543210",
        booking_id="B42",
        hotel_id="H1",
        room_type="Deluxe",
        check_in=datetime.date(2026, 1, 15),
        check_out=datetime.date(2026, 1, 17),
        total_amount=Decimal("4500.00"),
    )

"""SQL-backed user directory and hotel lookups."""

from sqlalchemy.orm import Session, sessionmaker

from notification_dispatch.db.repositories import HotelRepository, UserRepository
from notification_dispatch.directory import HotelRecord, UserRecord


class SqlUserDirectory:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_user(self, directory_id: str) -> UserRecord | None:
        with self._session_factory() as session:
            user = UserRepository(session).get_by_id(directory_id)
            if user is None:
                return None
            return UserRecord(
                directory_id=user.id,
                phone=user.phone_number,
                push_address=user.expo_push_token,
                display_name=user.full_name,
                role=user.role,
            )


class SqlHotelDirectory:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_hotel(self, hotel_id: str) -> HotelRecord | None:
        with self._session_factory() as session:
            hotel = HotelRepository(session).get_by_id(hotel_id)
            if hotel is None:
                return None
            return HotelRecord(
                hotel_id=hotel.id,
                designated_admin_id=hotel.hotel_admin,
                owner_id=hotel.user_id,
                name=hotel.name,
                location=hotel.location,
            )

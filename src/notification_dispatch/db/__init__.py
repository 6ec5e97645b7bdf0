"""Database layer: models, repositories, engine/session utilities."""

from notification_dispatch.db.base import (
    Base,
    create_db_engine,
    create_postgres_engine,
    create_session_factory,
)
from notification_dispatch.db.directory import SqlHotelDirectory, SqlUserDirectory
from notification_dispatch.db.models import DeliveryOutcomeRecord, DirectoryUser, Hotel
from notification_dispatch.db.repositories import (
    DeliveryOutcomeRepository,
    HotelRepository,
    UserRepository,
)

__all__ = [
    "Base",
    "create_db_engine",
    "create_postgres_engine",
    "create_session_factory",
    "DeliveryOutcomeRecord",
    "DirectoryUser",
    "Hotel",
    "DeliveryOutcomeRepository",
    "HotelRepository",
    "UserRepository",
    "SqlHotelDirectory",
    "SqlUserDirectory",
]

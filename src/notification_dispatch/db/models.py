"""SQLAlchemy ORM models.

``users`` and ``hotels`` belong to the booking application and are only
ever read here. ``delivery_outcomes`` is owned by this package and is
append-only.
"""

import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notification_dispatch.db.base import Base


class DirectoryUser(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    expo_push_token: Mapped[str | None] = mapped_column(String(255), nullable=True)


class Hotel(Base):
    __tablename__ = "hotels"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hotel_admin: Mapped[str | None] = mapped_column(String(128), nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)


class DeliveryOutcomeRecord(Base):
    __tablename__ = "delivery_outcomes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    channel: Mapped[str] = mapped_column(String(16), nullable=False)
    event_kind: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    recipient_directory_id: Mapped[str | None] = mapped_column(
        String(128), nullable=True, index=True
    )
    succeeded: Mapped[bool] = mapped_column(Boolean, nullable=False)
    detail: Mapped[str] = mapped_column(Text, nullable=False)
    recorded_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

"""Tests for ORM models, repositories and the SQL-backed directory and log."""

import datetime
from unittest.mock import patch

from sqlalchemy import select
from sqlalchemy.orm import Session

from notification_dispatch.db import (
    DeliveryOutcomeRecord,
    DeliveryOutcomeRepository,
    DirectoryUser,
    Hotel,
    HotelRepository,
    SqlHotelDirectory,
    SqlUserDirectory,
    UserRepository,
    create_db_engine,
)
from notification_dispatch.delivery_log import DeliveryOutcome, SqlDeliveryLog
from notification_dispatch.directory import HotelRecord, UserRecord
from notification_dispatch.enums import Channel


def _seed(db_session: Session) -> None:
    db_session.add_all(
        [
            DirectoryUser(
                id="U9",
                full_name="Hotel Admin",
                role="admin",
                phone_number="09876543210",
                expo_push_token="ExponentPushToken[abc]",
            ),
            Hotel(id="H1", name="Sea View", location="Goa", hotel_admin="U9", user_id="U1"),
            Hotel(id="H2", name="Hill Top", user_id="U9"),
        ]
    )
    db_session.flush()


class TestRepositories:
    def test_user_get_by_id(self, db_session: Session) -> None:
        _seed(db_session)
        repo = UserRepository(db_session)

        assert repo.get_by_id("U9").phone_number == "09876543210"
        assert repo.get_by_id("missing") is None

    def test_hotel_get_by_id(self, db_session: Session) -> None:
        _seed(db_session)
        assert HotelRepository(db_session).get_by_id("H1").hotel_admin == "U9"

    def test_outcome_add_assigns_id(self, db_session: Session) -> None:
        record = DeliveryOutcomeRepository(db_session).add(
            DeliveryOutcomeRecord(
                channel=Channel.PUSH,
                event_kind="booking.confirmed",
                recipient_directory_id="U1",
                succeeded=True,
                detail="delivered",
                recorded_at=datetime.datetime.now(datetime.timezone.utc),
            )
        )
        assert record.id is not None


class TestSqlDirectories:
    def test_user_mapped_to_record(self, db_session: Session, session_factory) -> None:
        _seed(db_session)

        assert SqlUserDirectory(session_factory).get_user("U9") == UserRecord(
            directory_id="U9",
            phone="09876543210",
            push_address="ExponentPushToken[abc]",
            display_name="Hotel Admin",
            role="admin",
        )

    def test_unknown_user(self, session_factory) -> None:
        assert SqlUserDirectory(session_factory).get_user("nobody") is None

    def test_hotel_mapped_to_record(self, db_session: Session, session_factory) -> None:
        _seed(db_session)
        directory = SqlHotelDirectory(session_factory)

        assert directory.get_hotel("H1") == HotelRecord(
            hotel_id="H1",
            designated_admin_id="U9",
            owner_id="U1",
            name="Sea View",
            location="Goa",
        )
        assert directory.get_hotel("H2").admin_id == "U9"
        assert directory.get_hotel("H404") is None


class TestSqlDeliveryLog:
    def test_append_writes_row(self, db_session: Session, session_factory) -> None:
        SqlDeliveryLog(session_factory).append(
            DeliveryOutcome(
                channel=Channel.MESSAGING,
                event_kind="admin.new_booking",
                recipient_directory_id="U9",
                succeeded=False,
                detail="phone_invalid:repeated_digits",
            )
        )

        rows = db_session.scalars(select(DeliveryOutcomeRecord)).all()
        assert len(rows) == 1
        assert rows[0].channel == "messaging"
        assert rows[0].succeeded is False
        assert rows[0].detail == "phone_invalid:repeated_digits"
        assert rows[0].recipient_directory_id == "U9"


class TestCreateDbEngine:
    def test_pre_ping_on_by_default(self) -> None:
        engine = create_db_engine("sqlite://")
        assert engine.pool._pre_ping is True
        engine.dispose()

    def test_pre_ping_can_be_disabled(self) -> None:
        engine = create_db_engine("sqlite://", pool_pre_ping=False)
        assert engine.pool._pre_ping is False
        engine.dispose()

    def test_no_driver_args_without_timeouts(self) -> None:
        with patch("notification_dispatch.db.base.create_engine") as make:
            create_db_engine("sqlite://")
        assert "connect_args" not in make.call_args.kwargs

    def test_timeouts_merge_into_connect_args(self) -> None:
        with patch("notification_dispatch.db.base.create_engine") as make:
            create_db_engine(
                "postgresql://db/app",
                connect_timeout=2,
                statement_timeout_ms=800,
                connect_args={"application_name": "dispatch"},
            )
        assert make.call_args.kwargs["connect_args"] == {
            "application_name": "dispatch",
            "connect_timeout": 2,
            "options": "-c statement_timeout=800",
        }

"""Admin contact resolution for admin-facing notifications.

Strategies are tried strictly in order and stop at the first usable
contact:

1. the directly supplied admin directory id,
2. the hotel's designated administrator (owner when none is designated),
3. each system fallback id, in order.

Every miss is logged. An entry that exists but has no usable phone
(``phone_missing`` / ``phone_invalid``) is reported separately from an
entry that does not exist at all (``not_found``).
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from notification_dispatch.directory import HotelDirectory, UserDirectory
from notification_dispatch.enums import LookupFailure, ResolutionStrategy
from notification_dispatch.phone import normalize

logger = logging.getLogger(__name__)

_ENTRY_FOUND_FAILURES = frozenset({LookupFailure.PHONE_MISSING, LookupFailure.PHONE_INVALID})


@dataclass(frozen=True, slots=True)
class AdminContact:
    directory_id: str
    display_name: str | None
    role: str | None
    raw_phone: str
    canonical_phone: str


@dataclass(frozen=True, slots=True)
class ResolutionAttempt:
    """One failed lookup inside the resolution chain."""

    strategy: ResolutionStrategy
    target_id: str
    failure: LookupFailure
    detail: str

    @property
    def entry_found(self) -> bool:
        return self.failure in _ENTRY_FOUND_FAILURES


class AdminContactNotResolvedError(Exception):
    """Every resolution strategy was exhausted without a usable contact."""

    def __init__(self, attempts: Sequence[ResolutionAttempt]) -> None:
        self.attempts = tuple(attempts)
        super().__init__(
            f"No admin contact resolved ({len(self.attempts)} failed attempts)"
        )


class AdminContactResolver:
    """Resolves one canonical admin contact from weak hints.

    Read-only against both directories. Nothing is cached: each call
    reads fresh records.
    """

    def __init__(self, users: UserDirectory, hotels: HotelDirectory) -> None:
        self._users = users
        self._hotels = hotels

    def resolve(
        self,
        hotel_id: str | None = None,
        direct_admin_id: str | None = None,
        fallback_ids: Sequence[str] = (),
    ) -> AdminContact:
        """Run the resolution chain.

        Raises AdminContactNotResolvedError when no strategy yields a
        contact with a valid phone.
        """
        attempts: list[ResolutionAttempt] = []

        if _present(direct_admin_id):
            contact = self._lookup(direct_admin_id, ResolutionStrategy.DIRECT, attempts)
            if contact is not None:
                return contact

        if _present(hotel_id):
            admin_id = self._hotel_admin_id(hotel_id, attempts)
            if admin_id is not None:
                contact = self._lookup(admin_id, ResolutionStrategy.HOTEL, attempts)
                if contact is not None:
                    return contact

        candidates = [fid for fid in fallback_ids if _present(fid)]
        if candidates:
            logger.warning(
                "Falling back to system admin contacts",
                extra={"hotel_id": hotel_id, "fallback_count": len(candidates)},
            )
        for fallback_id in candidates:
            contact = self._lookup(fallback_id, ResolutionStrategy.FALLBACK, attempts)
            if contact is not None:
                return contact

        logger.error(
            "No admin contact resolved",
            extra={
                "hotel_id": hotel_id,
                "direct_admin_id": direct_admin_id,
                "attempts": [
                    f"{a.strategy}:{a.target_id}:{a.failure}" for a in attempts
                ],
            },
        )
        raise AdminContactNotResolvedError(attempts)

    def lookup(self, directory_id: str) -> AdminContact | ResolutionAttempt:
        """Single directory lookup outside the chain, for diagnostics."""
        attempts: list[ResolutionAttempt] = []
        contact = self._lookup(directory_id, ResolutionStrategy.DIRECT, attempts)
        return contact if contact is not None else attempts[-1]

    def lookup_many(
        self, directory_ids: Sequence[str]
    ) -> dict[str, AdminContact | ResolutionAttempt]:
        """``lookup`` for each id, keyed by id in input order. Blank ids are skipped."""
        return {
            directory_id: self.lookup(directory_id)
            for directory_id in directory_ids
            if _present(directory_id)
        }

    def _lookup(
        self,
        directory_id: str,
        strategy: ResolutionStrategy,
        attempts: list[ResolutionAttempt],
    ) -> AdminContact | None:
        try:
            user = self._users.get_user(directory_id)
        except Exception:
            logger.exception(
                "Admin directory lookup failed",
                extra={"strategy": strategy, "directory_id": directory_id},
            )
            self._miss(attempts, strategy, directory_id, LookupFailure.LOOKUP_ERROR,
                       "directory lookup raised")
            return None

        if user is None:
            self._miss(attempts, strategy, directory_id, LookupFailure.NOT_FOUND,
                       "no directory entry")
            return None

        if not user.phone:
            self._miss(attempts, strategy, directory_id, LookupFailure.PHONE_MISSING,
                       "directory entry has no phone")
            return None

        result = normalize(user.phone)
        if not result.valid:
            self._miss(attempts, strategy, directory_id, LookupFailure.PHONE_INVALID,
                       result.message or str(result.reason))
            return None

        logger.info(
            "Admin contact resolved",
            extra={"strategy": strategy, "directory_id": directory_id, "phone": result.canonical},
        )
        return AdminContact(
            directory_id=user.directory_id,
            display_name=user.display_name,
            role=user.role,
            raw_phone=user.phone,
            canonical_phone=result.canonical,  # type: ignore[arg-type]
        )

    def _hotel_admin_id(
        self, hotel_id: str, attempts: list[ResolutionAttempt]
    ) -> str | None:
        try:
            hotel = self._hotels.get_hotel(hotel_id)
        except Exception:
            logger.exception("Hotel lookup failed", extra={"hotel_id": hotel_id})
            self._miss(attempts, ResolutionStrategy.HOTEL, hotel_id,
                       LookupFailure.LOOKUP_ERROR, "hotel lookup raised")
            return None

        if hotel is None:
            self._miss(attempts, ResolutionStrategy.HOTEL, hotel_id,
                       LookupFailure.HOTEL_NOT_FOUND, "no hotel record")
            return None

        admin_id = hotel.admin_id
        if not _present(admin_id):
            self._miss(attempts, ResolutionStrategy.HOTEL, hotel_id,
                       LookupFailure.HOTEL_ADMIN_MISSING,
                       "hotel has neither designated admin nor owner")
            return None
        return admin_id

    @staticmethod
    def _miss(
        attempts: list[ResolutionAttempt],
        strategy: ResolutionStrategy,
        target_id: str,
        failure: LookupFailure,
        detail: str,
    ) -> None:
        attempt = ResolutionAttempt(strategy, target_id, failure, detail)
        attempts.append(attempt)
        log_ctx = {
            "strategy": strategy,
            "target_id": target_id,
            "failure": failure,
            "entry_found": attempt.entry_found,
            "detail": detail,
        }
        if attempt.entry_found:
            logger.warning("Admin entry found but phone unusable", extra=log_ctx)
        else:
            logger.warning("Admin lookup missed", extra=log_ctx)


def _present(value: str | None) -> bool:
    return bool(value and value.strip())

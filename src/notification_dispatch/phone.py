"""Phone number normalization for the messaging channel.

Every number the messaging provider sees goes through :func:`normalize`
first. Canonical form is the country prefix followed by a ten digit
national mobile number, e.g. ``919876543210``.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from notification_dispatch.enums import RejectionReason

COUNTRY_PREFIX = "91"
NATIONAL_LENGTH = 10
VALID_LEADING_DIGITS = frozenset("6789")

_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass(frozen=True, slots=True)
class ContactValidationResult:
    """Outcome of normalizing one raw phone string.

    ``canonical`` is set only when ``valid``; ``reason`` and ``message``
    only when not.
    """

    valid: bool
    canonical: str | None = None
    reason: RejectionReason | None = None
    message: str | None = None

    @property
    def national_number(self) -> str | None:
        if self.canonical is None:
            return None
        return self.canonical[len(COUNTRY_PREFIX):]


def normalize(raw: str | None) -> ContactValidationResult:
    """Validate *raw* and return its canonical form or a typed rejection.

    Idempotent: normalizing a canonical value returns the same result.
    """
    digits = _NON_DIGITS.sub("", raw) if isinstance(raw, str) else ""
    if not digits:
        return _reject(RejectionReason.EMPTY, "Phone number cannot be empty")

    national = _extract_national_number(digits)

    if len(national) != NATIONAL_LENGTH:
        return _reject(
            RejectionReason.INVALID_LENGTH,
            f"Mobile numbers must be {NATIONAL_LENGTH} digits, found {len(national)}",
        )
    if national[0] not in VALID_LEADING_DIGITS:
        return _reject(
            RejectionReason.INVALID_LEADING_DIGIT,
            f"Mobile numbers must start with one of "
            f"{', '.join(sorted(VALID_LEADING_DIGITS))}, found {national[0]}",
        )
    if len(set(national)) == 1:
        return _reject(RejectionReason.REPEATED_DIGITS, "All digits are identical")
    if _is_cyclic_ascending(national):
        return _reject(RejectionReason.SEQUENTIAL_DIGITS, "Digits form a sequential run")

    return ContactValidationResult(valid=True, canonical=COUNTRY_PREFIX + national)


def _extract_national_number(digits: str) -> str:
    """Split off the country prefix or trunk zero; first matching shape wins."""
    if digits.startswith(COUNTRY_PREFIX) and len(digits) == len(COUNTRY_PREFIX) + NATIONAL_LENGTH:
        return digits[len(COUNTRY_PREFIX):]
    if digits.startswith("0") and len(digits) == NATIONAL_LENGTH + 1:
        return digits[1:]
    if len(digits) == NATIONAL_LENGTH:
        return digits
    if len(digits) > NATIONAL_LENGTH:
        return digits[-NATIONAL_LENGTH:]
    return digits


def _is_cyclic_ascending(number: str) -> bool:
    # 9 wraps to 0, so 7890123456 counts as a run.
    return all(
        int(curr) == (int(prev) + 1) % 10 for prev, curr in zip(number, number[1:])
    )


def _reject(reason: RejectionReason, message: str) -> ContactValidationResult:
    return ContactValidationResult(valid=False, reason=reason, message=message)


def is_valid(raw: str | None) -> bool:
    return normalize(raw).valid


def to_api_format(raw: str | None) -> str | None:
    """Canonical string for provider calls, or None when *raw* is invalid."""
    return normalize(raw).canonical


def format_for_display(raw: str | None) -> str:
    """Render as ``+91 98765 43210``; invalid input is returned unchanged."""
    result = normalize(raw)
    national = result.national_number
    if national is None:
        return raw or ""
    return f"+{COUNTRY_PREFIX} {national[:5]} {national[5:]}"


def normalize_batch(raws: Iterable[str | None]) -> list[ContactValidationResult]:
    return [normalize(raw) for raw in raws]

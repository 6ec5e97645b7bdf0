"""Notification dispatch and recipient resolution for hotel booking events."""

from notification_dispatch.dispatcher import NotificationDispatcher
from notification_dispatch.events import AnyNotificationEvent, parse_event
from notification_dispatch.factory import DispatchRuntime, create_runtime
from notification_dispatch.phone import (
    ContactValidationResult,
    format_for_display,
    is_valid,
    normalize,
    normalize_batch,
    to_api_format,
)
from notification_dispatch.resolver import (
    AdminContact,
    AdminContactNotResolvedError,
    AdminContactResolver,
    ResolutionAttempt,
)

__all__ = [
    "AdminContact",
    "AdminContactNotResolvedError",
    "AdminContactResolver",
    "AnyNotificationEvent",
    "ContactValidationResult",
    "DispatchRuntime",
    "NotificationDispatcher",
    "ResolutionAttempt",
    "create_runtime",
    "format_for_display",
    "is_valid",
    "normalize",
    "normalize_batch",
    "parse_event",
    "to_api_format",
]

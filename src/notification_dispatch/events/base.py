from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from notification_dispatch.enums import AdminEventKind, Channel, GuestEventKind


class EventMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    event_kind: GuestEventKind | AdminEventKind
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1


class EnabledChannels(BaseModel):
    """Per-event channel switches; unset means enabled."""

    model_config = ConfigDict(frozen=True)

    push: bool = True
    messaging: bool = True

    def enabled(self) -> list[Channel]:
        channels = []
        if self.push:
            channels.append(Channel.PUSH)
        if self.messaging:
            channels.append(Channel.MESSAGING)
        return channels


class AdminHint(BaseModel):
    """Caller-supplied admin recipient that bypasses contact resolution."""

    model_config = ConfigDict(frozen=True)

    contact_phone: str | None = None
    directory_id: str | None = None

    @property
    def is_explicit(self) -> bool:
        return bool(self.contact_phone or self.directory_id)

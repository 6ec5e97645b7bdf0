"""HTTP client for the Expo push service."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from notification_dispatch.config import PushProviderConfig
from notification_dispatch.providers.base import PushMessage, PushProvider

logger = logging.getLogger(__name__)


class PushTicket(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    message: str | None = None


class PushSendResponse(BaseModel):
    """The service answers with either one ticket or a list of tickets
    under ``data``; older endpoints put ``status`` at the top level.
    """

    model_config = ConfigDict(extra="ignore")

    data: PushTicket | list[PushTicket] | None = None
    status: str | None = None

    def first_ticket(self) -> PushTicket | None:
        if isinstance(self.data, list):
            return self.data[0] if self.data else None
        return self.data

    def succeeded(self) -> bool:
        if self.data is not None:
            ticket = self.first_ticket()
            return ticket is not None and ticket.status == "ok"
        return self.status == "ok"


def decode_push_response(raw: Any) -> bool:
    """Anything that is not an explicit ``"ok"`` counts as failure."""
    try:
        return PushSendResponse.model_validate(raw).succeeded()
    except ValidationError:
        return False


class ExpoPushClient(PushProvider):
    def __init__(
        self,
        config: PushProviderConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = config.url
        self._client = httpx.Client(
            timeout=config.timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def submit(self, message: PushMessage) -> bool:
        response = self._client.post(
            self._url,
            json={
                "to": message.address,
                "title": message.title,
                "body": message.body,
                "data": message.data,
                "channelId": message.channel_class,
                "sound": "default",
                "priority": "high",
            },
        )
        if response.is_error:
            logger.error(
                "Push provider HTTP error",
                extra={"status_code": response.status_code, "body": response.text[:200]},
            )
            return False

        try:
            payload = response.json()
        except ValueError:
            logger.error("Push provider returned non-JSON response")
            return False

        if not decode_push_response(payload):
            logger.warning("Push provider rejected message", extra={"response": payload})
            return False
        return True

    def close(self) -> None:
        self._client.close()

"""HTTP client for the text-messaging gateway."""

import logging

import httpx

from notification_dispatch.config import MessagingProviderConfig
from notification_dispatch.providers.base import MessagingProvider

logger = logging.getLogger(__name__)


class HttpMessagingClient(MessagingProvider):
    """Sends via ``GET base_url?apikey=..&to=..&message=..``.

    The gateway replies with JSON whose ``status`` is ``true`` on success.
    """

    def __init__(
        self,
        config: MessagingProviderConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = config.base_url
        self._api_key = config.api_key
        self._client = httpx.Client(timeout=config.timeout_seconds, transport=transport)

    def submit(self, canonical_phone: str, body: str) -> bool:
        response = self._client.get(
            self._base_url,
            params={
                "apikey": self._api_key.get_secret_value(),
                "to": canonical_phone,
                "message": body,
            },
        )
        if response.is_error:
            logger.error(
                "Messaging provider HTTP error",
                extra={"status_code": response.status_code},
            )
            return False

        try:
            payload = response.json()
        except ValueError:
            logger.error("Messaging provider returned non-JSON response")
            return False

        if not isinstance(payload, dict) or payload.get("status") is not True:
            logger.warning("Messaging provider rejected message", extra={"response": payload})
            return False
        return True

    def close(self) -> None:
        self._client.close()

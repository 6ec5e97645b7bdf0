from urllib.parse import quote_plus

from pydantic import SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatchConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NOTIFICATION_DISPATCH_")

    log_level: str = "INFO"
    # JSON list in the environment, e.g. '["0TgS3HwbSzMsyCOJQBf9sGB75it1"]'
    system_fallback_admin_ids: list[str] = []
    max_channel_workers: int = 2
    # Upper bound on one dispatch; must exceed provider plus directory timeouts.
    channel_timeout_seconds: float = 30.0


class PushProviderConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PUSH_PROVIDER_")

    url: str = "https://exp.host/--/api/v2/push/send"
    timeout_seconds: float = 10.0


class MessagingProviderConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MESSAGING_PROVIDER_")

    base_url: str = "https://api.webifyit.in/api/v1/dev/create-message"
    api_key: SecretStr = SecretStr("")
    timeout_seconds: float = 10.0


class PostgresConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="POSTGRES_")

    host: str = "localhost"
    port: int = 5432
    database: str = "hotel_booking"
    user: str = "postgres"
    password: str = "postgres"
    connect_timeout_seconds: int = 5
    query_timeout_seconds: float = 5.0
    pool_timeout_seconds: float = 10.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dsn(self) -> str:
        return (
            f"postgresql://{quote_plus(self.user)}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{self.database}"
        )

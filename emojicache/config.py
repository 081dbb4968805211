from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EMOJI_", env_file=".env", enable_decoding=False
    )

    server_url: str
    token: SecretStr

    # Seconds to keep a batch window open; 0 flushes on the next loop turn.
    batch_delay: float = Field(default=0.0, ge=0)
    request_timeout: float = Field(default=30.0, gt=0)

    system_emoji_file: Path | None = None
    sentry_dsn: SecretStr | None = None

    @field_validator("server_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            msg = "`server_url` must be an http(s) URL"
            raise ValueError(msg)
        return value.rstrip("/")

"""Configuration schema using Pydantic."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TelegramConfig(BaseModel):
    """Telegram bot credentials and the paired owner."""
    token: str = ""  # Bot token from @BotFather
    owner_id: int | None = None  # Set by `stockerbot pair`
    username: str = ""  # Owner's Telegram username, if any

    @property
    def is_paired(self) -> bool:
        return bool(self.token) and self.owner_id is not None


class PairingConfig(BaseModel):
    """Owner pairing handshake settings."""
    timeout_seconds: float = Field(default=60.0, gt=0)
    deep_link_host: str = "t.me"
    probe_timeout_seconds: float = Field(default=10.0, gt=0)


class Config(BaseSettings):
    """Root configuration for stockerbot."""
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    pairing: PairingConfig = Field(default_factory=PairingConfig)

    model_config = SettingsConfigDict(
        env_prefix="STOCKERBOT_",
        env_nested_delimiter="__",
    )

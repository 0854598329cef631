from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ClientSettings(BaseSettings):
    """
    Environment-driven settings for the board client.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ---- Service ----
    base_url: str = Field(default="https://2ch.hk", alias="DVACH_BASE_URL")
    request_timeout_sec: float = Field(default=15.0, alias="DVACH_REQUEST_TIMEOUT_SEC")
    user_agent: str = Field(default="dvach/0.1", alias="DVACH_USER_AGENT")

    # ---- Rendering ----
    # Column width of post/thread comments before the two-space indent
    comment_width: int = Field(default=80, gt=0, alias="DVACH_COMMENT_WIDTH")

    # ---- Logging ----
    log_level: str = Field(default="WARNING", alias="DVACH_LOG_LEVEL")
    # Interactive sessions only log when this is set (stderr belongs to curses)
    log_file: str | None = Field(default=None, alias="DVACH_LOG_FILE")


def load_settings() -> ClientSettings:
    return ClientSettings()

# receptionist/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    clinic_name: str = Field("Sehat", validation_alias="CLINIC_NAME")

    # Seconds between staggered agent replies
    reminder_delay: float = Field(0.35, validation_alias="REMINDER_DELAY")
    confirmation_delay: float = Field(0.4, validation_alias="CONFIRMATION_DELAY")
    closing_delay: float = Field(0.4, validation_alias="CLOSING_DELAY")
    reply_pacing: float = Field(1.0, ge=0, validation_alias="REPLY_PACING")

    interrupt_match_mode: Literal["substring", "token"] = Field(
        "substring", validation_alias="INTERRUPT_MATCH_MODE"
    )
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

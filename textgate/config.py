from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False            # True for production (structured JSON), False for dev (colored)
    LOG_REJECTIONS: bool = False      # Emit a DEBUG event for every rejected input
    LOG_REDACT_VALUES: bool = True    # Mask the rejected input in log output

    # Declarative validators
    VALIDATORS_FILE: str | None = None

    class Config:
        env_file = ".env"
        env_prefix = "TEXTGATE_"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

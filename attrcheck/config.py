from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for structured JSON, False for colored console output

    # Coercion
    ALLOW_NUMERIC_TRUNCATION: bool = False  # truncate toward zero instead of failing on int narrowing

    class Config:
        env_prefix = "ATTRCHECK_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""
Application configuration

Defaults describe the postcode-restricted shipping method as a fresh
install would see it. Everything can be overridden from the environment
or a .env file.
"""
import json
import logging
from typing import List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Zip Shipping"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"

    # Shipping method defaults (used when the host has no saved value)
    ZIP_SHIPPING_METHOD_ID: str = "zip_shipping"
    ZIP_SHIPPING_DEFAULT_TITLE: str = "Local delivery"
    ZIP_SHIPPING_DEFAULT_COST: str = "0"

    # Parsed allow-lists kept in memory, keyed by raw settings text
    PATTERN_CACHE_SIZE: int = Field(default=128, ge=0)

    # Method ids the factory hands out. Empty = every registered method.
    # Accepts JSON array or comma-separated string
    ZIP_SHIPPING_ENABLED_METHODS: Union[str, List[str]] = []

    @field_validator("ZIP_SHIPPING_ENABLED_METHODS", mode="before")
    @classmethod
    def parse_enabled_methods(cls, v):
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            if not v or v.strip() == "":
                return []
            # Try JSON first
            if v.startswith("["):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Fallback to comma-separated
            return [method.strip() for method in v.split(",") if method.strip()]
        return v

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()

"""Application settings"""
import sys
from decimal import Decimal
from functools import lru_cache
from typing import ClassVar, cast

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _running_tests() -> bool:
    return "pytest" in sys.modules


class Settings(BaseSettings):
    """Application settings"""
    app_name: str = "NyayaSetu"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    debug: bool = Field(default_factory=_running_tests)

    # Storage backend
    use_mongo: bool = False
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/nyayasetu",
        validation_alias=AliasChoices("MONGODB_URI", "MONGO_URL"),
    )
    mongodb_db_name: str = "nyayasetu"
    mongodb_timeout_ms: int = 5000
    seed_demo_data: bool = True

    # Auth tokens
    secret_key: str = Field(
        default="nyayasetu-secret-key",
        validation_alias=AliasChoices("SECRET_KEY", "SESSION_SECRET"),
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440

    cors_allow_origins: list[str] = ["http://localhost:3001", "http://127.0.0.1:3001"]

    # Razorpay
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_api_base: str = "https://api.razorpay.com/v1"
    connection_fee: Decimal = Decimal("10.00")
    gst_rate: Decimal = Decimal("0.18")
    connection_validity_days: int = 30

    log_level: str = "INFO"
    log_dir: str = "logs"

    model_config: ClassVar[SettingsConfigDict] = cast(
        SettingsConfigDict,
        cast(
            object,
            {
                "env_file": None if _running_tests() else ".env",
                "extra": "ignore",
                "populate_by_name": True,
            },
        ),
    )

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _parse_cors_allow_origins(cls, value: object):
        if isinstance(value, str):
            parts = [p.strip() for p in value.split(",")]
            return [p for p in parts if p]
        return value

    @field_validator("use_mongo", "seed_demo_data", mode="before")
    @classmethod
    def _parse_flag(cls, value: object):
        if isinstance(value, str):
            s = value.strip().lower()
            if s in {"1", "true", "yes", "y", "on"}:
                return True
            if s in {"", "0", "false", "no", "n", "off"}:
                return False
        return value

    @field_validator("debug", mode="before")
    @classmethod
    def _parse_debug(cls, value: object):
        if value is None:
            return bool(_running_tests())
        if isinstance(value, bool):
            return bool(value)
        if isinstance(value, int):
            return bool(int(value))
        if isinstance(value, str):
            s = value.strip().lower()
            if not s:
                return bool(_running_tests())
            if s in {"1", "true", "yes", "y", "on"}:
                return True
            if s in {"0", "false", "no", "n", "off"}:
                return False
            return True
        return bool(_running_tests())

    @model_validator(mode="after")
    def _validate_security(self):
        if _running_tests():
            return self
        insecure_defaults = {
            "nyayasetu-secret-key",
            "your-secret-key-here",
        }
        if self.is_production:
            if self.secret_key in insecure_defaults or len(self.secret_key) < 32:
                raise ValueError("SECRET_KEY must be set to a secure value in production")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance"""
    return Settings()

"""Registry settings using Pydantic BaseSettings."""

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, TypeAdapter, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ca_registry.schemas import Attribute

_attribute_list = TypeAdapter(List[Attribute])

_DEFAULT_BOOTSTRAP_ATTRIBUTES = (
    '[{"name": "hf.Registrar.Roles", "value": "client,user,peer,validator,auditor"},'
    ' {"name": "hf.Registrar.DelegateRoles", "value": "client,user,validator,auditor"},'
    ' {"name": "hf.Revoker", "value": "true"}]'
)


def _get_default_db_path() -> str:
    """Get absolute path to default SQLite database."""
    package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    db_path = os.path.join(package_dir, "data", "registry.db")
    return f"sqlite:///{db_path}"


class Settings(BaseSettings):
    """Registry configuration loaded from ``REGISTRY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")

    # Database
    database_url: str = Field(default_factory=_get_default_db_path)
    database_echo: bool = Field(default=False)
    pool_pre_ping: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    log_file: Optional[str] = Field(default=None)

    # Bootstrap registrar identity (startup-only, env-driven)
    bootstrap_enabled: bool = Field(default=False)
    bootstrap_name: str = Field(default="")
    bootstrap_secret: str = Field(default="")
    bootstrap_type: str = Field(default="client")
    bootstrap_attributes: str = Field(
        default=_DEFAULT_BOOTSTRAP_ATTRIBUTES,
        description="JSON list of {name, value} attribute entries for the bootstrap identity.",
    )
    bootstrap_root_group: str = Field(default="")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.environment == "test"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        vv = (v or "").strip().lower()
        if vv not in {"development", "staging", "production", "test"}:
            raise ValueError("REGISTRY_ENVIRONMENT must be one of: development, staging, production, test")
        return vv

    @field_validator("bootstrap_attributes")
    @classmethod
    def validate_bootstrap_attributes(cls, v: str) -> str:
        try:
            _attribute_list.validate_json(v)
        except ValidationError as exc:
            raise ValueError(f"REGISTRY_BOOTSTRAP_ATTRIBUTES is not a valid attribute list: {exc}") from exc
        return v

    @model_validator(mode="after")
    def validate_database_url(self) -> "Settings":
        if not self.database_url.strip():
            raise ValueError("REGISTRY_DATABASE_URL must not be empty")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Configuration for the ECCANG client."""

from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment."""

    base_url: str = "http://localhost/default/svc/web-service"
    app_token: SecretStr = SecretStr("")
    app_key: SecretStr = SecretStr("")
    timeout_seconds: float = 60.0
    audit_log_enabled: bool = False
    audit_logger_name: str = "eccang_client.audit"

    model_config = SettingsConfigDict(env_prefix="ECCANG_", env_file=".env")

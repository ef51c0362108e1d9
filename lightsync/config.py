# lightsync/config.py
"""
Configuration management using Pydantic Settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    LOG_LEVEL: str = "INFO"
    # WebDAV transport defaults; per-server values live on the ServerProfile
    WEBDAV_USER_AGENT: str = "LightSync/0.1"
    WEBDAV_DEFAULT_TIMEOUT: int = Field(30, ge=1, le=300)
    WEBDAV_VERIFY_SSL: bool = True
    WEBDAV_FOLLOW_REDIRECTS: bool = True
    WEBDAV_MAX_CONNECTIONS: int = Field(10, ge=1)

settings = Settings()

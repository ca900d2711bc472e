from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..modules.debugger.infrastructure.http_client import DEFAULT_ENDPOINT


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    endpoint_url: str = Field(DEFAULT_ENDPOINT, alias="AI_DEBUGGER_ENDPOINT")
    # None keeps requests waiting until the endpoint answers
    request_timeout: Optional[float] = Field(None, gt=0, alias="AI_DEBUGGER_TIMEOUT")
    scan_on_change: bool = Field(True, alias="AI_DEBUGGER_SCAN_ON_CHANGE")

    server_name: str = Field("ai-debugger", alias="AI_DEBUGGER_SERVER_NAME")
    server_version: str = Field("0.1.0", alias="AI_DEBUGGER_SERVER_VERSION")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(None, alias="AI_DEBUGGER_LOG_FILE")

    @field_validator("endpoint_url")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("AI_DEBUGGER_ENDPOINT must be an http(s) URL")
        return value

    @field_validator("request_timeout", "log_file", mode="before")
    @classmethod
    def _empty_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def ensure_dirs(self) -> None:
        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)

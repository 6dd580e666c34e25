"""
Typed settings for the SCAHA scraper service.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. A .env file at the repository root is
read when present.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import DEFAULT_BASE_URL, validate_env

TransportMode = Literal["auto", "http", "browser"]


class UpstreamConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    scoreboard_path: str = "/scaha/scoreboard.xhtml"
    stats_central_path: str = "/scaha/statscentral.xhtml"
    session_cookie_name: str = "JSESSIONID"
    view_state_field: str = "javax.faces.ViewState"
    user_agent: str = "Mozilla/5.0 (compatible; SCAHA-MCP/1.0)"
    request_timeout_seconds: float = 30.0

    @property
    def scoreboard_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.scoreboard_path}"

    @property
    def stats_central_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.stats_central_path}"


class BrowserConfig(BaseModel):
    headless: bool = True
    executable_path: str | None = None
    launch_args: list[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"]
    )
    viewport_width: int = 1280
    viewport_height: int = 720
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    # Per-step bounds; a step that exceeds its bound aborts the query
    page_load_timeout_ms: int = 30000
    network_idle_timeout_ms: int = 15000
    selector_timeout_ms: int = 15000


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    For local development, values may also come from the root .env file.
    All settings are validated by Pydantic.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    transport_mode: TransportMode = Field("auto", alias="SCAHA_TRANSPORT")
    # Upstream serves the previously cached season after an AJAX season switch
    allow_season_switch: bool = Field(False, alias="SCAHA_ALLOW_SEASON_SWITCH")
    mcp_host: str = Field("127.0.0.1", alias="MCP_HOST")
    mcp_port: int = Field(8000, alias="MCP_PORT")
    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    base_url_override: str | None = Field(None, alias="SCAHA_BASE_URL")
    chrome_executable_path: str | None = Field(None, alias="CHROME_EXECUTABLE_PATH")

    @model_validator(mode="after")
    def _apply_overrides(self) -> Settings:
        """
        Allow top-level env vars (SCAHA_BASE_URL / CHROME_EXECUTABLE_PATH)
        to override the nested groups without double-underscore syntax.
        """
        if self.base_url_override:
            self.upstream.base_url = self.base_url_override
        if self.chrome_executable_path:
            self.browser.executable_path = self.chrome_executable_path
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Settings are cached to avoid re-parsing environment variables
    on every access.
    """
    validate_env()
    return Settings()


# Global settings instance - import this in other modules
settings = get_settings()

"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _strip_trailing_slash(value: Any) -> Any:
    if isinstance(value, str):
        return value.rstrip("/")
    return value


class CatalogConfig(BaseModel):
    """Addon catalog identity and listing behaviour.

    All values configurable via YAML (catalog section).
    """

    type: str = Field(default="tv", description="Stremio content type served.")
    id: str = Field(
        default="live-media-premium",
        description="The single catalog id this addon answers for.",
    )
    name: str = Field(
        default="Live Content (Premium)",
        description="Catalog display name in the manifest.",
    )
    id_prefix: str = Field(
        default="pm-content",
        description="Prefix of composite ids (<prefix>:<category>:<rawId>).",
    )
    max_items: int = Field(
        default=15,
        description="Max display items returned per catalog request.",
    )
    default_category: str = Field(
        default="all",
        description="Category used when the request carries no genre filter.",
    )
    category_aliases: dict[str, str] = Field(
        default={
            "action": "football",
            "drama": "basketball",
            "comedy": "tennis",
            "documentary": "boxing",
        },
        description="Genre -> upstream category path segment.",
    )
    poster_placeholder: str = Field(
        default="https://via.placeholder.com/300x450?text=Premium+Content",
        description="Poster used when an entry has none.",
    )

    @field_validator("max_items")
    @classmethod
    def _validate_max_items(cls, v: int) -> int:
        if v < 0:
            raise ValueError("catalog.max_items must be >= 0")
        return v

    @field_validator("id_prefix")
    @classmethod
    def _validate_prefix(cls, v: str) -> str:
        if not v or ":" in v:
            raise ValueError("catalog.id_prefix must be non-empty and contain no ':'")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/content_api/unlock/catalog).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="matchcast", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for every upstream request.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default="Matchcast/1.0.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Content API (YAML section: content_api.*)
    content_api_base_url: str = Field(
        default="https://streamed.pk/api",
        validation_alias=AliasChoices(
            "content_api_base_url",
            AliasPath("content_api", "base_url"),
        ),
        description="Base URL of the catalog/media content API.",
    )

    # Unlock service (YAML section: unlock.*)
    unlock_api_base_url: str = Field(
        default="https://api.alldebrid.com/v4",
        validation_alias=AliasChoices(
            "unlock_api_base_url",
            AliasPath("unlock", "base_url"),
        ),
        description="Base URL of the link-unlocking service.",
    )
    unlock_agent: str = Field(
        default="matchcast",
        validation_alias=AliasChoices(
            "unlock_agent",
            AliasPath("unlock", "agent"),
        ),
        description="Agent identifier sent with every unlock request.",
    )
    premium_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "premium_api_key",
            AliasPath("unlock", "api_key"),
        ),
        description="Unlock service API key. Premium unlocking is off without it.",
    )

    # Catalog (YAML section: catalog.*)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)

    @field_validator("content_api_base_url", "unlock_api_base_url", mode="before")
    @classmethod
    def _validate_base_urls(cls, v: Any) -> Any:
        return _strip_trailing_slash(v)

    @field_validator("premium_api_key", mode="before")
    @classmethod
    def _blank_key_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def premium_enabled(self) -> bool:
        """Capability flag: premium unlocking on/off."""
        return self.premium_api_key is not None

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        The premium key is masked.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "content_api": {"base_url": self.content_api_base_url},
            "unlock": {
                "base_url": self.unlock_api_base_url,
                "agent": self.unlock_agent,
                "api_key": "***" if self.premium_api_key else None,
            },
            "catalog": self.catalog.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read MATCHCAST_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - MATCHCAST_HTTP_TIMEOUT_SECONDS
    - MATCHCAST_LOG_LEVEL
    - MATCHCAST_CONTENT_API_BASE_URL
    - MATCHCAST_PREMIUM_API_KEY (also PREMIUM_SERVICE_KEY / PS_KEY)
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHCAST_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    content_api_base_url: Optional[str] = None
    unlock_api_base_url: Optional[str] = None
    unlock_agent: Optional[str] = None

    premium_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "MATCHCAST_PREMIUM_API_KEY",
            "PREMIUM_SERVICE_KEY",
            "PS_KEY",
        ),
    )

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)

"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (SARWEB_ prefix) and .env
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

_PACKAGE_API_DIR = Path(__file__).resolve().parent.parent / "api"


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=3000, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    static_dir: Path = Field(default=_PACKAGE_API_DIR / "static", description="Static asset directory")
    templates_dir: Path = Field(default=_PACKAGE_API_DIR / "templates", description="HTML template directory")


class ElasticsearchSettings(BaseModel):
    """Connection settings for the Elasticsearch cluster holding SAR reports."""

    url: str = Field(default="http://kubernetes-vm:30920", description="Elasticsearch node URL")
    username: str | None = Field(default="fraud", description="HTTP basic-auth username")
    password: str | None = Field(default="hunter", description="HTTP basic-auth password")
    index: str = Field(default="sar-reports", description="Index holding SAR report documents")
    verify_certs: bool = Field(default=False, description="Verify TLS certificates of the cluster")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-call timeout in seconds")


class PaginationSettings(BaseModel):
    """Listing page size limits."""

    default_page_size: int = Field(default=10, ge=1, description="Page size when none is requested")
    max_page_size: int = Field(default=100, ge=1, description="Largest accepted page size")


class RateLimitSettings(BaseModel):
    """Fixed-window rate limiting for the API routes."""

    enabled: bool = Field(default=True, description="Whether rate limiting is applied")
    max_requests: int = Field(default=100, ge=1, description="Requests allowed per client per window")
    window_seconds: int = Field(default=15 * 60, ge=1, description="Window length in seconds")
    path_prefix: str = Field(default="/api/", description="Only paths under this prefix are limited")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SARWEB_ prefix.
    Nested settings use double underscores: SARWEB_SERVER__PORT=8080

    Example:
        SARWEB_ENVIRONMENT=production
        SARWEB_ELASTICSEARCH__URL=https://es.internal:9200
        SARWEB_ELASTICSEARCH__INDEX=sar-reports
    """

    model_config = {
        "env_prefix": "SARWEB_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="SAR Web System", description="Application name")
    environment: str = Field(
        default="production",
        description="Runtime mode; only 'development' discloses error details in responses",
    )

    server: ServerSettings = Field(default_factory=ServerSettings)
    elasticsearch: ElasticsearchSettings = Field(default_factory=ElasticsearchSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, v: Any) -> str:
        return str(v).strip().lower() if v is not None else "production"

    @property
    def is_development(self) -> bool:
        """Whether raw error messages may be returned to clients."""
        return self.environment == "development"

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file win over environment variables; anything
        the file leaves out still falls back to the environment and defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

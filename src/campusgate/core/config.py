"""
Configuration management for the Campus gateway.
"""

from functools import lru_cache
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_FALSE_WORDS = {"", "0", "false", "no", "off"}


class ResourceConfig(BaseModel):
    """Location of one backend resource service."""

    model_config = ConfigDict(frozen=True)

    name: str
    host: str
    port: int
    entry: str

    @property
    def base_url(self) -> str:
        """Base URL every call to this resource is built from."""
        return f"http://{self.host}:{self.port}/{self.entry}"


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(default="development", description="Deployment environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO")

    # Application
    app_name: str = "Campus Gateway"
    app_version: str = "0.1.0"

    # GraphQL listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, description="Gateway listener port")
    cors_origins: List[str] = Field(default=["*"])

    # Outbound calls
    show_urls: bool = Field(default=False, description="Log every outbound backend URL")
    request_timeout_seconds: float = Field(default=30, ge=1, le=300)

    # Courses service
    courses_url: str = Field(description="Courses service host")
    courses_port: int = Field(description="Courses service port")
    courses_entry: str = Field(description="Courses service path segment")

    # Students service
    students_url: str = Field(description="Students service host")
    students_port: int = Field(description="Students service port")
    students_entry: str = Field(description="Students service path segment")

    @field_validator("environment")
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ["development", "staging", "production", "testing"]
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v

    @field_validator("show_urls", mode="before")
    def parse_show_urls(cls, v: Any) -> bool:
        """Any non-empty value turns URL logging on, except the usual false words."""
        if isinstance(v, str):
            return v.strip().lower() not in _FALSE_WORDS
        return bool(v)

    @field_validator("courses_entry", "students_entry")
    def strip_entry_slashes(cls, v: str) -> str:
        return v.strip("/")

    def resource(self, name: str) -> ResourceConfig:
        """Build the resource config for ``name`` from its ``<name>_url/_port/_entry`` fields."""
        try:
            return ResourceConfig(
                name=name,
                host=getattr(self, f"{name}_url"),
                port=getattr(self, f"{name}_port"),
                entry=getattr(self, f"{name}_entry"),
            )
        except AttributeError:
            raise KeyError(f"Unknown resource: {name}") from None

    @property
    def courses(self) -> ResourceConfig:
        return self.resource("courses")

    @property
    def students(self) -> ResourceConfig:
        return self.resource("students")

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class JWTConfig(BaseModel):
    """Configuration for the bearer tokens issued by /users/authenticate."""

    algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256", description="Signing algorithm for issued tokens"
    )
    gen_issuer: str = Field(
        default="library-catalog", description="Issuer name to use when generating tokens"
    )
    audiences: list[str] = Field(
        default_factory=lambda: ["library-catalog-api"],
        description="JWT audiences that this API accepts",
    )
    signing_secret: str | None = Field(
        default=None, description="Secret used to sign and verify tokens"
    )
    expires_in_seconds: int = Field(default=3600, description="Token lifetime")
    clock_skew: int = Field(default=60, description="Clock skew tolerance in seconds")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./library.db",
        description="Database connection URL",
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables: bool = Field(
        default=True, description="Create missing tables on application startup"
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string, injecting the password if configured."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if self.password_env_var is None:
            return self.url

        import os

        password = os.getenv(self.password_env_var)
        if not password:
            raise ValueError(f"Environment variable {self.password_env_var} not set")
        if base_url.password and base_url.password != password:
            logger.warning(
                "Database password from environment variable does not match the one in the URL. Using password from environment variable."
            )
        return base_url.set(password=password).render_as_string(hide_password=False)


class PaginationConfig(BaseModel):
    """Page size limits applied to filtered listings."""

    default_per_page: int = Field(default=10, ge=1, description="Default page size")
    max_per_page: int = Field(
        default=100, ge=1, le=10_000, description="Largest page size accepted"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    seed_endpoints: bool = Field(
        default=False,
        description="Serve the /DB seeding endpoints outside the test environment",
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def seed_endpoints_enabled(self) -> bool:
        return self.seed_endpoints or self.environment == "test"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    jwt: JWTConfig = Field(
        default_factory=JWTConfig, description="Bearer token configuration"
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Pagination configuration"
    )

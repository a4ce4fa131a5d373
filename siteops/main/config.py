"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
Settings come from environment variables, a ``.env`` file and defaults;
Docker-style ``*_FILE`` secrets are resolved before anything is read.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from siteops.shared import EnumEnvironment, EnumLogLevel, EnumLogSink
from siteops.shared.env import load_secret_file_variables  # noqa: F401


class SiteSettings(BaseSettings):
    """Website identity and HTTP server settings."""

    title: str = Field(default="GitMesh CE Website", description="Site title")
    description: str = Field(
        default="Community website error handling, logging and health monitoring",
        description="Site description",
    )
    version: str = Field(
        default="1.0.0",
        description="Site version",
        validation_alias=AliasChoices("SITE_VERSION", "APP_VERSION"),
    )
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SITE_", case_sensitive=False, extra="ignore"
    )


class AuthSettings(BaseSettings):
    """Sign-in and admin API settings."""

    auth_secret: Optional[str] = Field(
        default=None,
        description="Session secret",
        validation_alias=AliasChoices("NEXTAUTH_SECRET", "AUTH_SECRET"),
    )
    google_client_id: Optional[str] = Field(
        default=None, description="Google OAuth client id"
    )
    google_client_secret: Optional[str] = Field(
        default=None, description="Google OAuth client secret"
    )
    admin_emails: Optional[str] = Field(
        default=None,
        description="Comma separated admin e-mail addresses",
        validation_alias=AliasChoices("GITMESH_CE_ADMIN_EMAILS", "ADMIN_EMAILS"),
    )
    admin_api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required by the admin log endpoints",
        validation_alias=AliasChoices("ADMIN_API_TOKEN", "AUTH_ADMIN_API_TOKEN"),
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class GitHubSettings(BaseSettings):
    """GitHub API settings."""

    token: Optional[str] = Field(default=None, description="GitHub API token")
    repo: Optional[str] = Field(
        default=None, description="Repository in owner/name form"
    )
    api_url: str = Field(
        default="https://api.github.com", description="GitHub API base URL"
    )

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_", case_sensitive=False, extra="ignore"
    )


class EmailSettings(BaseSettings):
    """Transactional e-mail provider settings."""

    provider: str = Field(default="sendgrid", description="E-mail provider name")
    sendgrid_api_key: Optional[str] = Field(
        default=None,
        description="Provider API key",
        validation_alias=AliasChoices("SENDGRID_API_KEY", "EMAIL_API_KEY"),
    )
    from_email: Optional[str] = Field(
        default=None,
        description="Sender address",
        validation_alias=AliasChoices("FROM_EMAIL", "EMAIL_FROM"),
    )
    api_url: str = Field(
        default="https://api.sendgrid.com", description="Provider API base URL"
    )

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )
    dir: str = Field(default="logs", description="Directory for error log files")
    max_files: int = Field(default=10, ge=1, description="Error log files retained")
    max_size_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1, description="Size that triggers rotation"
    )
    sink: EnumLogSink = Field(
        default=EnumLogSink.FILE, description="Where production records are persisted"
    )
    endpoint_url: str = Field(
        default="http://localhost:8000/api/errors",
        description="Submission endpoint used by the HTTP sink",
    )
    webhook_url: Optional[str] = Field(
        default=None,
        description="External webhook receiving a copy of each record",
        validation_alias=AliasChoices("ERROR_WEBHOOK_URL", "LOG_WEBHOOK_URL"),
    )
    service_name: str = Field(
        default="gitmesh-ce-website", description="Service name sent to the webhook"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class MonitoringSettings(BaseSettings):
    """Health check scheduling and uptime settings."""

    health_check_interval_seconds: float = Field(
        default=300.0,
        ge=0,
        description="Interval between scheduled health checks (0 disables them)",
    )
    uptime_max_checks: int = Field(
        default=100, ge=1, description="Uptime samples retained"
    )
    uptime_window: int = Field(
        default=20, ge=1, description="Samples used for availability"
    )
    temp_dir: Optional[str] = Field(
        default=None, description="Directory used by the file system probe"
    )

    model_config = SettingsConfigDict(
        env_prefix="MONITORING_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    site: SiteSettings = Field(default_factory=SiteSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    email: EmailSettings = Field(default_factory=EmailSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()

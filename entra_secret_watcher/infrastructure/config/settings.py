"""Application settings loaded from environment variables."""

import os
import re
from dataclasses import dataclass, field
from functools import cached_property
from urllib.parse import urlparse

from croniter import croniter

from ...application.exceptions import ConfigurationError
from ...domain.value_objects import ScanThreshold, TenantContext
from ...domain.value_objects.threshold import MAX_THRESHOLD_DAYS, MIN_THRESHOLD_DAYS
from ..adapters.entra_id.graph_client import GraphClientConfig
from ..adapters.notifications.gotify import GotifyConfig
from ..adapters.notifications.graph_email import GraphEmailConfig
from ..adapters.notifications.teams import TeamsConfig

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, str(default))
    try:
        return int(value)
    except ValueError as e:
        msg = f"{key} must be an integer, got {value!r}"
        raise ConfigurationError(msg) from e


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass
class Settings:
    """Application settings container."""

    # Azure/Entra ID
    azure_tenant_id: str = field(default_factory=lambda: _env_str("AZURE_TENANT_ID"))
    azure_client_id: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_ID"))
    azure_client_secret: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_SECRET"))
    tenant_name: str = field(default_factory=lambda: _env_str("TENANT_NAME", "Default"))

    # Watcher
    threshold_days: int = field(default_factory=lambda: _env_int("THRESHOLD_DAYS", 30))
    cron_schedule: str = field(default_factory=lambda: _env_str("CRON_SCHEDULE", "0 8 * * *"))
    dry_run: bool = field(default_factory=lambda: _env_bool("DRY_RUN"))
    grouped_report: bool = field(default_factory=lambda: _env_bool("GROUPED_REPORT", default=True))

    # Run configuration
    run_mode: str = field(default_factory=lambda: _env_str("RUN_MODE", "once"))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    tracing_enabled: bool = field(default_factory=lambda: _env_bool("TRACING_ENABLED"))

    # Graph email settings
    email_enabled: bool = field(default_factory=lambda: _env_bool("EMAIL_ENABLED"))
    email_from: str = field(default_factory=lambda: _env_str("EMAIL_FROM"))
    email_to: str = field(default_factory=lambda: _env_str("EMAIL_TO"))
    email_save_to_sent: bool = field(default_factory=lambda: _env_bool("EMAIL_SAVE_TO_SENT"))

    # Gotify settings
    gotify_enabled: bool = field(default_factory=lambda: _env_bool("GOTIFY_ENABLED"))
    gotify_url: str = field(default_factory=lambda: _env_str("GOTIFY_URL"))
    gotify_token: str = field(default_factory=lambda: _env_str("GOTIFY_TOKEN"))

    # Teams settings
    teams_enabled: bool = field(default_factory=lambda: _env_bool("TEAMS_ENABLED"))
    teams_webhook_url: str = field(default_factory=lambda: _env_str("TEAMS_WEBHOOK_URL"))

    # API settings
    api_enabled: bool = field(default_factory=lambda: _env_bool("API_ENABLED"))
    api_host: str = field(default_factory=lambda: _env_str("API_HOST", "0.0.0.0"))  # noqa: S104
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", 8080))

    def validate(self) -> None:
        """Validate settings, reporting every problem at once."""
        errors: list[str] = []

        missing = [
            name
            for name, value in (
                ("AZURE_TENANT_ID", self.azure_tenant_id),
                ("AZURE_CLIENT_ID", self.azure_client_id),
                ("AZURE_CLIENT_SECRET", self.azure_client_secret),
            )
            if not value
        ]
        if missing:
            errors.append(f"Missing required environment variables: {', '.join(missing)}")

        if not (MIN_THRESHOLD_DAYS <= self.threshold_days <= MAX_THRESHOLD_DAYS):
            errors.append(
                f"THRESHOLD_DAYS must be between {MIN_THRESHOLD_DAYS} and {MAX_THRESHOLD_DAYS}."
            )

        if not self.cron_schedule or not croniter.is_valid(self.cron_schedule):
            errors.append(f"CRON_SCHEDULE is not a valid cron expression: {self.cron_schedule!r}")

        errors.extend(self._validate_channels())

        if errors:
            raise ConfigurationError("; ".join(errors))

    def _validate_channels(self) -> list[str]:
        """Validate enabled notification channels only."""
        errors: list[str] = []

        if self.gotify_enabled:
            if not self.gotify_url:
                errors.append("GOTIFY_URL is required when Gotify is enabled.")
            elif not _is_http_url(self.gotify_url):
                errors.append("GOTIFY_URL must be a valid HTTP(S) URL.")
            if not self.gotify_token:
                errors.append("GOTIFY_TOKEN is required when Gotify is enabled.")

        if self.email_enabled:
            if not self.email_from:
                errors.append("EMAIL_FROM is required when Email is enabled.")
            elif not _EMAIL_PATTERN.match(self.email_from):
                errors.append("EMAIL_FROM must be a valid email address.")
            if not self.graph_email_config.recipients:
                errors.append("EMAIL_TO is required when Email is enabled.")

        if self.teams_enabled:
            if not self.teams_webhook_url:
                errors.append("TEAMS_WEBHOOK_URL is required when Teams is enabled.")
            elif not _is_http_url(self.teams_webhook_url):
                errors.append("TEAMS_WEBHOOK_URL must be a valid HTTP(S) URL.")

        return errors

    @cached_property
    def graph_config(self) -> GraphClientConfig:
        """Get Graph API client configuration."""
        return GraphClientConfig(
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
        )

    @cached_property
    def tenant(self) -> TenantContext:
        """Get the tenant being scanned."""
        return TenantContext(tenant_id=self.azure_tenant_id, tenant_name=self.tenant_name)

    @cached_property
    def threshold(self) -> ScanThreshold:
        """Get the scan inclusion threshold."""
        return ScanThreshold(days=self.threshold_days)

    @cached_property
    def graph_email_config(self) -> GraphEmailConfig:
        """Get Graph email configuration."""
        return GraphEmailConfig(
            enabled=self.email_enabled,
            from_address=self.email_from,
            to_addresses=self.email_to,
            save_to_sent_items=self.email_save_to_sent,
        )

    @cached_property
    def gotify_config(self) -> GotifyConfig:
        """Get Gotify configuration."""
        return GotifyConfig(
            enabled=self.gotify_enabled,
            url=self.gotify_url,
            token=self.gotify_token,
        )

    @cached_property
    def teams_config(self) -> TeamsConfig:
        """Get Teams configuration."""
        return TeamsConfig(
            enabled=self.teams_enabled,
            webhook_url=self.teams_webhook_url,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings

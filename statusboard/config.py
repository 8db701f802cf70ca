from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Persistence (None = uptime history falls back to synthetic 100% data)
    status_db_url: str | None = None

    # Logging
    status_log_level: str = "info"

    # Incident documents
    status_incidents_dir: str = "incidents"

    # Probing
    status_probe_timeout: float = 10.0
    status_poll_interval: int = 60  # seconds
    status_monitor_enabled: bool = True
    status_user_agent: str = "TokenBot-StatusPage/1.0"

    # Uptime retention (days, never below 95)
    status_retention_days: int = 95

    # Optional YAML file replacing the built-in service list
    status_services_file: str | None = None

    # CORS
    status_cors_origins: str = "*"

    # Per-service health URL overrides
    rest_api_health_url: str = "https://rest-api.tokenbot.com/v1/health"
    graphql_health_url: str = "https://gql-api.tokenbot.com/health"
    dashboard_health_url: str = "https://app.tokenbot.com/api/health"
    admin_health_url: str = "https://admin.tokenbot.com/api/health"
    webhooks_health_url: str = "https://webhooks.tokenbot.com/health"
    landing_health_url: str = "https://tokenbot.com"

    model_config = {"env_prefix": "", "case_sensitive": False, "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

"""Central environment-driven settings for the order status engine.

Loaded once per process. Every value has a default so the pure lookup
functions stay importable without any environment (see `.env.example`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "order-status"
    log_level: str = "INFO"
    default_role: str = "customer"
    orders_api_url: str = "http://orders-api:8080"
    http_timeout_seconds: float = 5.0
    tracing_enabled: bool = False
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = CommonSettings()

"""Startup-time helpers for safe config logging."""

from pydantic_settings import BaseSettings

from orderflow.common.logging import logger

SECRET_MARKERS = ("key", "secret", "password", "token")


def redacted_settings(config: BaseSettings, fields: list[str]) -> dict[str, str]:
    """Selected settings as strings, with secret-like field names masked."""

    values = {}
    for field in fields:
        if any(marker in field.lower() for marker in SECRET_MARKERS):
            values[field] = "<redacted>"
        elif not hasattr(config, field):
            values[field] = "<unset>"
        else:
            values[field] = str(getattr(config, field))
    return values


def log_startup_config(config: BaseSettings, fields: list[str]) -> dict[str, str]:
    """Log the effective values of selected settings for quick troubleshooting."""

    values = redacted_settings(config, fields)
    logger.info("startup_config=%s", values)
    return values

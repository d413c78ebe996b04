"""
Configuration management for snmp-checks.

Handles loading configuration from environment variables, .env files,
YAML config files, and CLI arguments with proper precedence
(CLI > config file > environment > defaults).
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from snmp_checks.constants import SNMPDefaults
from snmp_checks.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    ConfigValidationError,
)

# =============================================================================
# SNMP Credentials
# =============================================================================


class SNMPv2cCredentials(BaseModel):
    """SNMPv2c credentials using community string."""

    model_config = ConfigDict(frozen=True)

    community: SecretStr = Field(default=SecretStr(SNMPDefaults.COMMUNITY))
    port: Annotated[int, Field(default=SNMPDefaults.PORT, ge=1, le=65535)]
    timeout: Annotated[int, Field(default=SNMPDefaults.TIMEOUT, ge=1, le=120)]
    retries: Annotated[int, Field(default=SNMPDefaults.RETRIES, ge=0, le=10)]


# =============================================================================
# Main Settings
# =============================================================================


class ProbeSettings(BaseSettings):
    """
    Main settings for snmp-checks, loaded from environment and config files.

    Environment variables (prefix SNMPCHECK_):
        SNMPCHECK_COMMUNITY, SNMPCHECK_PORT, SNMPCHECK_TIMEOUT
        SNMPCHECK_RETRIES, SNMPCHECK_DELAY
        SNMPCHECK_DEBUG, SNMPCHECK_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="SNMPCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # SNMP session
    community: SecretStr = SecretStr(SNMPDefaults.COMMUNITY)
    port: Annotated[int, Field(default=SNMPDefaults.PORT, ge=1, le=65535)]
    timeout: Annotated[int, Field(default=SNMPDefaults.TIMEOUT, ge=1, le=120)]
    retries: Annotated[int, Field(default=SNMPDefaults.RETRIES, ge=0, le=10)]

    # Rate checks
    delay: Annotated[int, Field(default=SNMPDefaults.SAMPLE_DELAY, ge=1, le=3600)]

    # Logging
    debug: bool = False
    log_level: Annotated[
        str, Field(default="WARNING", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    ]

    @property
    def credentials(self) -> SNMPv2cCredentials:
        """Build SNMPv2c credentials from the session fields."""
        return SNMPv2cCredentials(
            community=self.community,
            port=self.port,
            timeout=self.timeout,
            retries=self.retries,
        )

    def merged(self, **overrides: Any) -> ProbeSettings:
        """
        Return a copy with overrides applied.

        None values are ignored so unset CLI options keep the current value.
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        if "community" in values and not isinstance(values["community"], SecretStr):
            values["community"] = SecretStr(str(values["community"]))
        return self.model_copy(update=values)


# =============================================================================
# Config Files
# =============================================================================


def load_settings_file(path: Path | str) -> ProbeSettings:
    """
    Load settings from a YAML file on top of the environment.

    Args:
        path: Path to a YAML mapping of ProbeSettings fields

    Returns:
        ProbeSettings instance

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not valid YAML or not a mapping
        ConfigValidationError: If a field value is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {config_path}",
            context={"path": str(config_path)},
        )

    try:
        return ProbeSettings(**data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ())) or "config"
        raise ConfigValidationError(field, first.get("input"), first.get("msg", "invalid")) from e


# =============================================================================
# Singleton Settings Access
# =============================================================================

_settings: ProbeSettings | None = None


def get_settings() -> ProbeSettings:
    """
    Get the global settings instance.

    Creates a new instance on first call, returns cached instance thereafter.
    """
    global _settings
    if _settings is None:
        _settings = ProbeSettings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None

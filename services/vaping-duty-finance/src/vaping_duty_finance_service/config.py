"""
Configuration management for the vaping duty finance service.

Loads configuration from YAML with ZERO defaults.
Every value must be explicitly specified or startup fails.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator
from service_commons.config import (
    REDACTION_MARKER,
    create_settings_loader,
    get_safe_model_config,
)
from service_commons.config import get_config_path as resolve_config_path

from vaping_duty_finance_service.auth.predicates import ConfidenceLevel, CredentialStrength

if TYPE_CHECKING:
    from pathlib import Path


class ServiceConfig(BaseModel):
    """Service identity configuration."""

    model_config = ConfigDict(extra="forbid")
    name: str
    version: str


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="forbid")
    host: str
    port: int
    log_level: str


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")
    level: str
    directory: str


class AuthConfig(BaseModel):
    """Auth service connection configuration."""

    model_config = ConfigDict(extra="forbid")
    base_url: str
    authorise_path: str
    timeout_seconds: int


class EnrolmentConfig(BaseModel):
    """Enrolment the caller must hold, and the identifier it must carry."""

    model_config = ConfigDict(extra="forbid")
    service_key: str
    identifier_key: str


class PolicyConfig(BaseModel):
    """Minimum credential requirements sent with every authorisation check."""

    model_config = ConfigDict(extra="forbid")
    confidence_level: int
    credential_strength: str

    @field_validator("confidence_level")
    @classmethod
    def _known_confidence_level(cls, value: int) -> int:
        ConfidenceLevel(value)
        return value

    @field_validator("credential_strength")
    @classmethod
    def _known_credential_strength(cls, value: str) -> str:
        if value not in CredentialStrength.VALID_STRENGTHS:
            msg = f"credential_strength must be one of {sorted(CredentialStrength.VALID_STRENGTHS)}"
            raise ValueError(msg)
        return value


class Settings(BaseModel):
    """
    Root configuration container.

    All fields are REQUIRED. No defaults exist.
    Missing fields cause immediate startup failure.
    """

    model_config = ConfigDict(extra="forbid")
    service: ServiceConfig
    server: ServerConfig
    logging: LoggingConfig
    auth: AuthConfig
    enrolment: EnrolmentConfig
    policy: PolicyConfig


def get_config_path() -> Path:
    """Determine configuration file path."""
    return resolve_config_path(
        env_var_name="CONFIG_PATH",
        default_filename="config.yaml",
    )


get_settings, clear_settings_cache = create_settings_loader(Settings, get_config_path)  # nosemgrep


def get_safe_config() -> dict[str, Any]:
    """Get configuration with sensitive values redacted."""
    return get_safe_model_config(get_settings(), REDACTION_MARKER)

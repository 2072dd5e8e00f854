"""Tests for configuration loading."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from service_commons.config import REDACTION_MARKER, ConfigurationError

from tests.helpers import make_config_yaml
from vaping_duty_finance_service.config import (
    Settings,
    clear_settings_cache,
    get_safe_config,
    get_settings,
)

if TYPE_CHECKING:
    from pathlib import Path


def _write_config(tmp_path: Path, content: str) -> None:
    config_path = tmp_path / "override.yaml"
    config_path.write_text(content)
    os.environ["CONFIG_PATH"] = str(config_path)
    clear_settings_cache()


@pytest.mark.unit
class TestSettingsLoad:
    """Test that settings load correctly from config.yaml."""

    def test_settings_load_from_config_yaml(self) -> None:
        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.service.name == "vaping-duty-finance"
        assert settings.server.port == 8010

    def test_auth_section(self) -> None:
        settings = get_settings()
        assert settings.auth.base_url == "http://localhost:8500"
        assert settings.auth.authorise_path == "/auth/authorise"
        assert settings.auth.timeout_seconds == 10

    def test_enrolment_section(self) -> None:
        settings = get_settings()
        assert settings.enrolment.service_key == "HMRC-VPD-ORG"
        assert settings.enrolment.identifier_key == "VPPAID"

    def test_policy_section(self) -> None:
        settings = get_settings()
        assert settings.policy.confidence_level == 50
        assert settings.policy.credential_strength == "strong"

    def test_settings_are_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_safe_config_has_all_sections(self) -> None:
        safe = get_safe_config()
        assert set(safe) == {"service", "server", "logging", "auth", "enrolment", "policy"}
        assert REDACTION_MARKER not in str(safe)


@pytest.mark.unit
class TestSettingsRejected:
    """Invalid configuration fails startup."""

    def test_rejects_extra_fields(self, tmp_path: Path) -> None:
        content = make_config_yaml(str(tmp_path)).replace(
            'version: "0.1.0"',
            'version: "0.1.0"\n  unknown_field: true',
        )
        _write_config(tmp_path, content)

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_rejects_missing_section(self, tmp_path: Path) -> None:
        content = make_config_yaml(str(tmp_path)).split("policy:")[0]
        _write_config(tmp_path, content)

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_rejects_unknown_confidence_level(self, tmp_path: Path) -> None:
        content = make_config_yaml(str(tmp_path)).replace(
            "confidence_level: 50",
            "confidence_level: 75",
        )
        _write_config(tmp_path, content)

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_rejects_unknown_credential_strength(self, tmp_path: Path) -> None:
        content = make_config_yaml(str(tmp_path)).replace('"strong"', '"medium"')
        _write_config(tmp_path, content)

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        os.environ["CONFIG_PATH"] = str(tmp_path / "absent.yaml")
        clear_settings_cache()

        with pytest.raises(ConfigurationError):
            get_settings()

"""Unit test fixtures."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from tests.helpers import make_config_yaml
from vaping_duty_finance_service.config import clear_settings_cache
from vaping_duty_finance_service.core.state import reset_app_state

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolate_test(tmp_path: Path) -> Iterator[None]:
    """Point CONFIG_PATH at a temp config and clear caches around each test."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(make_config_yaml(str(tmp_path / "logs")))

    old_config = os.environ.get("CONFIG_PATH")
    os.environ["CONFIG_PATH"] = str(config_path)
    clear_settings_cache()
    reset_app_state()

    yield

    if old_config is None:
        os.environ.pop("CONFIG_PATH", None)
    else:
        os.environ["CONFIG_PATH"] = old_config
    clear_settings_cache()
    reset_app_state()

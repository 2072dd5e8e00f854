"""Shared test helpers for the authorisation gate."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

from starlette.requests import Request

from vaping_duty_finance_service.auth.connector import AuthClient
from vaping_duty_finance_service.auth.enrolments import (
    Enrolment,
    EnrolmentIdentifier,
    Enrolments,
)
from vaping_duty_finance_service.core.state import get_app_state

ENROLMENT_KEY = "HMRC-VPD-ORG"
VPPA_ID_KEY = "VPPAID"
VPPA_ID = "XMADP9876543210"
INTERNAL_ID = "internalId"
STATE = "Activated"

ENROLMENTS = Enrolments.of(
    Enrolment(ENROLMENT_KEY, (EnrolmentIdentifier(VPPA_ID_KEY, VPPA_ID),), STATE),
)
EMPTY_ENROLMENTS = Enrolments.of()
ENROLMENTS_WITHOUT_VPPA_ID = Enrolments.of(Enrolment(ENROLMENT_KEY, (), STATE))


def make_config_yaml(log_directory: str) -> str:
    """Return a complete service config with logs under log_directory."""
    return f"""\
service:
  name: "vaping-duty-finance"
  version: "0.1.0"
server:
  host: "0.0.0.0"
  port: 8010
  log_level: "info"
logging:
  level: "INFO"
  directory: "{log_directory}"
auth:
  base_url: "http://localhost:8500"
  authorise_path: "/auth/authorise"
  timeout_seconds: 10
enrolment:
  service_key: "{ENROLMENT_KEY}"
  identifier_key: "{VPPA_ID_KEY}"
policy:
  confidence_level: 50
  credential_strength: "strong"
"""


def make_request(
    path: str = "/",
    headers: dict[str, str] | None = None,
) -> Request:
    """Build a bare Starlette request without running an app."""
    raw_headers = [
        (name.lower().encode(), value.encode()) for name, value in (headers or {}).items()
    ]
    scope: dict[str, Any] = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("test", 80),
        "path": path,
        "query_string": b"",
        "headers": raw_headers,
    }
    return Request(scope)


def make_mock_auth_connector(
    authorise_response: Any = None,
    authorise_side_effect: Exception | None = None,
) -> AsyncMock:
    """Create a mock auth connector with the AuthClient interface."""
    mock_connector = AsyncMock(spec=AuthClient)
    if authorise_side_effect is not None:
        mock_connector.authorise.side_effect = authorise_side_effect
    else:
        mock_connector.authorise.return_value = authorise_response
    return mock_connector


def inject_mock_auth(
    authorise_response: Any = None,
    authorise_side_effect: Exception | None = None,
) -> AsyncMock:
    """Swap the live auth client behind the running app's gate for a mock."""
    mock_connector = make_mock_auth_connector(
        authorise_response=authorise_response,
        authorise_side_effect=authorise_side_effect,
    )
    state = get_app_state()
    assert state.authorised_action is not None
    state.authorised_action._auth_connector = mock_connector
    return mock_connector

"""Application state management."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vaping_duty_finance_service.actions.authorised_action import AuthorisedAction
    from vaping_duty_finance_service.auth.connector import AuthClient


@dataclass
class AppState:
    """Runtime application state."""

    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    auth_client: AuthClient | None = None
    authorised_action: AuthorisedAction | None = None

    @property
    def uptime_seconds(self) -> float:
        """Calculate uptime in seconds."""
        return (datetime.now(UTC) - self.start_time).total_seconds()

    @property
    def started_at(self) -> str:
        """ISO format start time."""
        return self.start_time.isoformat()


# Module-level mutable container to avoid `global` statement
_state_holder: dict[str, AppState] = {}


def get_app_state() -> AppState:
    """Get the current application state."""
    state = _state_holder.get("current")
    if state is None:
        raise RuntimeError("Application state not initialized")
    return state


def init_app_state() -> AppState:
    """Initialize application state. Called during startup."""
    state = AppState()
    _state_holder["current"] = state
    return state


def reset_app_state() -> None:
    """Reset application state. Used in testing."""
    _state_holder.pop("current", None)

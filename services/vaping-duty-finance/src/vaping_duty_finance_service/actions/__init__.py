"""Request actions wrapped around protected endpoints."""

from vaping_duty_finance_service.actions.authorised_action import (
    AuthorisationPolicy,
    AuthorisedAction,
    unauthorised_response,
)

__all__ = ["AuthorisationPolicy", "AuthorisedAction", "unauthorised_response"]

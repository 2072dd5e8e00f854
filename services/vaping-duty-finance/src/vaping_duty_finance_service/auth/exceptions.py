"""
Authorisation failures reported by the auth service.

This is a closed family: the auth service signals exactly these reasons in
its ``WWW-Authenticate: MDTP detail="<reason>"`` header. Anything raised
during authorisation that is not an AuthorisationException is an upstream
or programming failure and is not treated as a denial.
"""

from __future__ import annotations

import re
from typing import ClassVar

_MDTP_DETAIL_PATTERN = re.compile(r'^MDTP detail="([^"]+)"$')


class AuthorisationException(Exception):
    """Base for every reason the auth service can refuse a caller."""

    reason: ClassVar[str] = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.reason)

    @staticmethod
    def from_reason(reason: str) -> AuthorisationException:
        """Build the exception matching a wire reason; unknown reasons become InternalError."""
        exception_type = _BY_REASON.get(reason)
        if exception_type is None:
            return InternalError(reason)
        return exception_type()

    @staticmethod
    def from_www_authenticate(header: str | None) -> AuthorisationException:
        """Parse an MDTP WWW-Authenticate header value."""
        if header is None:
            return InternalError("Missing WWW-Authenticate header")
        match = _MDTP_DETAIL_PATTERN.match(header.strip())
        if match is None:
            return InternalError(f"Unparsable WWW-Authenticate header: {header}")
        return AuthorisationException.from_reason(match.group(1))


class InsufficientConfidenceLevel(AuthorisationException):
    reason = "InsufficientConfidenceLevel"


class InsufficientEnrolments(AuthorisationException):
    reason = "InsufficientEnrolments"


class UnsupportedAffinityGroup(AuthorisationException):
    reason = "UnsupportedAffinityGroup"


class UnsupportedCredentialRole(AuthorisationException):
    reason = "UnsupportedCredentialRole"


class UnsupportedAuthProvider(AuthorisationException):
    reason = "UnsupportedAuthProvider"


class IncorrectCredentialStrength(AuthorisationException):
    reason = "IncorrectCredentialStrength"


class InternalError(AuthorisationException):
    """The auth service failed to evaluate the predicate, or sent a reason we do not know."""

    reason = "InternalError"


class NoActiveSession(AuthorisationException):
    """The caller has no usable session; they need to sign in again."""


class BearerTokenExpired(NoActiveSession):
    reason = "BearerTokenExpired"


class MissingBearerToken(NoActiveSession):
    reason = "MissingBearerToken"


class InvalidBearerToken(NoActiveSession):
    reason = "InvalidBearerToken"


class SessionRecordNotFound(NoActiveSession):
    reason = "SessionRecordNotFound"


AUTHORISATION_FAILURES: tuple[type[AuthorisationException], ...] = (
    InsufficientConfidenceLevel,
    InsufficientEnrolments,
    UnsupportedAffinityGroup,
    UnsupportedCredentialRole,
    UnsupportedAuthProvider,
    IncorrectCredentialStrength,
    InternalError,
    BearerTokenExpired,
    MissingBearerToken,
    InvalidBearerToken,
    SessionRecordNotFound,
)

_BY_REASON: dict[str, type[AuthorisationException]] = {
    failure.reason: failure for failure in AUTHORISATION_FAILURES
}

"""Async HTTP client for the auth service."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import httpx
from service_commons.exceptions import ServiceError

from vaping_duty_finance_service.auth.enrolments import EnrolmentParseError
from vaping_duty_finance_service.auth.exceptions import AuthorisationException
from vaping_duty_finance_service.auth.retrievals import RetrievalParseError
from vaping_duty_finance_service.logging import get_logger

if TYPE_CHECKING:
    from vaping_duty_finance_service.auth.predicates import Predicate
    from vaping_duty_finance_service.auth.retrievals import Retrieval

T = TypeVar("T")

# Caller headers the auth service needs to identify the session
FORWARDED_HEADERS: tuple[str, ...] = ("authorization", "x-session-id", "x-request-id")


class AuthConnector(Protocol):
    """Anything that can ask the auth service to authorise the current caller."""

    async def authorise(
        self,
        predicate: Predicate,
        retrieval: Retrieval[T],
        headers: Mapping[str, str],
    ) -> T: ...


def _unavailable(message: str) -> ServiceError:
    return ServiceError(
        error="AUTH_SERVICE_UNAVAILABLE",
        message=message,
        status_code=502,
        details={},
    )


class AuthClient:
    """
    Client for the auth service's authorise endpoint.

    Sends the predicate and the requested retrievals on behalf of the caller,
    forwarding the caller's session headers.

    A 401 from the auth service is an authorisation failure and raises the
    matching AuthorisationException. Everything else that goes wrong
    (connection, timeout, unexpected status, malformed body) raises
    ServiceError AUTH_SERVICE_UNAVAILABLE (502).
    """

    def __init__(
        self,
        base_url: str,
        authorise_path: str,
        timeout_seconds: int,
    ) -> None:
        self._base_url = base_url
        self._authorise_path = authorise_path
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds),
        )

    async def authorise(
        self,
        predicate: Predicate,
        retrieval: Retrieval[T],
        headers: Mapping[str, str],
    ) -> T:
        """
        Authorise the caller and return the retrieved values.

        Args:
            predicate: Conditions the caller must satisfy
            retrieval: Properties to fetch about the caller
            headers: Inbound request headers; session headers are forwarded

        Raises:
            AuthorisationException: the auth service refused the caller (401)
            ServiceError: AUTH_SERVICE_UNAVAILABLE (502) on any other failure
        """
        logger = get_logger(__name__)

        forwarded = {
            name: value for name, value in headers.items() if name.lower() in FORWARDED_HEADERS
        }
        body: dict[str, Any] = {
            "authorise": predicate.to_json(),
            "retrieve": list(retrieval.property_names),
        }

        try:
            response = await self._client.post(
                self._authorise_path,
                json=body,
                headers=forwarded,
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            logger.warning(
                "Auth service connection failed",
                extra={"error": str(exc), "base_url": self._base_url},
            )
            raise _unavailable("Cannot connect to auth service") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "Auth service HTTP error",
                extra={"error": str(exc), "base_url": self._base_url},
            )
            raise _unavailable("Auth service request failed") from exc

        if response.status_code == 401:
            raise AuthorisationException.from_www_authenticate(
                response.headers.get("www-authenticate")
            )

        if response.status_code != 200:
            logger.warning(
                "Auth service unexpected status",
                extra={"status_code": response.status_code, "base_url": self._base_url},
            )
            raise _unavailable(
                f"Auth service returned unexpected response (status {response.status_code})"
            )

        try:
            result = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise _unavailable("Auth service returned a non-JSON response") from exc

        if not isinstance(result, dict):
            raise _unavailable("Auth service returned a malformed response")

        try:
            return retrieval.read(result)
        except (EnrolmentParseError, RetrievalParseError) as exc:
            logger.warning("Auth service retrieval malformed", extra={"error": str(exc)})
            raise _unavailable("Auth service returned a malformed response") from exc

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

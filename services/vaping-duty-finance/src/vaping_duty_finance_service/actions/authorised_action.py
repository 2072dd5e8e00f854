"""Authorisation gate wrapped around every protected endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse

from vaping_duty_finance_service.auth.exceptions import AuthorisationException
from vaping_duty_finance_service.auth.predicates import (
    AffinityGroup,
    AuthProvider,
    AuthProviders,
    ConfidenceLevel,
    CredentialStrength,
    EnrolmentPredicate,
)
from vaping_duty_finance_service.auth.retrievals import authorised_enrolments, internal_id
from vaping_duty_finance_service.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import Request
    from starlette.responses import Response

    from vaping_duty_finance_service.auth.connector import AuthConnector
    from vaping_duty_finance_service.auth.enrolments import Enrolments
    from vaping_duty_finance_service.auth.predicates import Predicate
    from vaping_duty_finance_service.auth.retrievals import Retrieval
    from vaping_duty_finance_service.config import Settings

    Block = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True)
class AuthorisationPolicy:
    """What every caller must satisfy, built once at startup."""

    predicate: Predicate
    retrieval: Retrieval[tuple[str | None, Enrolments]]
    enrolment_key: str
    identifier_key: str

    @classmethod
    def build(
        cls,
        enrolment_key: str,
        identifier_key: str,
        confidence_level: ConfidenceLevel,
        credential_strength: str,
    ) -> AuthorisationPolicy:
        predicate = (
            AuthProviders(AuthProvider.GOVERNMENT_GATEWAY)
            & EnrolmentPredicate(enrolment_key)
            & CredentialStrength(credential_strength)
            & AffinityGroup.ORGANISATION
            & confidence_level
        )
        return cls(
            predicate=predicate,
            retrieval=internal_id & authorised_enrolments,
            enrolment_key=enrolment_key,
            identifier_key=identifier_key,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> AuthorisationPolicy:
        return cls.build(
            enrolment_key=settings.enrolment.service_key,
            identifier_key=settings.enrolment.identifier_key,
            confidence_level=ConfidenceLevel(settings.policy.confidence_level),
            credential_strength=settings.policy.credential_strength,
        )


def unauthorised_response() -> JSONResponse:
    """401 returned for every refusal, whatever the cause."""
    return JSONResponse(
        status_code=401,
        content={"error": "UNAUTHORIZED", "message": "Unauthorized", "details": {}},
    )


class AuthorisedAction:
    """
    Gate that only lets enrolled organisations through to the wrapped block.

    One auth service call per request. The block runs only when the caller
    is authorised, has an internal id, and holds the configured enrolment
    with the configured identifier. Any AuthorisationException becomes a
    401; every other exception propagates untouched.
    """

    def __init__(self, auth_connector: AuthConnector, policy: AuthorisationPolicy) -> None:
        self._auth_connector = auth_connector
        self._policy = policy

    async def invoke_block(self, request: Request, block: Block) -> Response:
        """Authorise the caller of request, then run block(request) or return 401."""
        logger = get_logger(__name__)
        policy = self._policy

        try:
            caller_internal_id, enrolments = await self._auth_connector.authorise(
                policy.predicate,
                policy.retrieval,
                request.headers,
            )
        except AuthorisationException as exc:
            logger.info(
                "Authorisation refused",
                extra={"reason": type(exc).__name__, "path": str(request.url.path)},
            )
            return unauthorised_response()

        if caller_internal_id is None:
            logger.info("Authorised caller has no internal id", extra={"path": str(request.url.path)})
            return unauthorised_response()

        enrolment = enrolments.get_enrolment(policy.enrolment_key)
        identifier = (
            enrolment.get_identifier(policy.identifier_key) if enrolment is not None else None
        )
        if identifier is None:
            logger.info(
                "Authorised caller is missing the required enrolment identifier",
                extra={
                    "enrolment_key": policy.enrolment_key,
                    "identifier_key": policy.identifier_key,
                    "path": str(request.url.path),
                },
            )
            return unauthorised_response()

        request.state.internal_id = caller_internal_id
        request.state.enrolment_identifier = identifier.value
        return await block(request)

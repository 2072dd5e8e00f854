"""Auth service client, predicates, retrievals and failure types."""

from vaping_duty_finance_service.auth.connector import AuthClient, AuthConnector
from vaping_duty_finance_service.auth.enrolments import (
    Enrolment,
    EnrolmentIdentifier,
    Enrolments,
)
from vaping_duty_finance_service.auth.exceptions import (
    AUTHORISATION_FAILURES,
    AuthorisationException,
)
from vaping_duty_finance_service.auth.predicates import (
    AffinityGroup,
    AuthProvider,
    AuthProviders,
    ConfidenceLevel,
    CredentialStrength,
    EnrolmentPredicate,
)
from vaping_duty_finance_service.auth.retrievals import authorised_enrolments, internal_id

__all__ = [
    "AUTHORISATION_FAILURES",
    "AffinityGroup",
    "AuthClient",
    "AuthConnector",
    "AuthProvider",
    "AuthProviders",
    "AuthorisationException",
    "ConfidenceLevel",
    "CredentialStrength",
    "Enrolment",
    "EnrolmentIdentifier",
    "EnrolmentPredicate",
    "Enrolments",
    "authorised_enrolments",
    "internal_id",
]

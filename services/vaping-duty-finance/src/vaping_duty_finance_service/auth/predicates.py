"""
Authorisation predicates sent to the auth service.

Each predicate renders to the JSON fragment the auth service expects in the
"authorise" list. Predicates combine with ``&`` into a flat conjunction, so

    AuthProviders(AuthProvider.GOVERNMENT_GATEWAY)
    & EnrolmentPredicate("HMRC-VPD-ORG")
    & CredentialStrength(CredentialStrength.STRONG)
    & AffinityGroup.ORGANISATION
    & ConfidenceLevel.L50

serialises to a five-element list. All predicates are immutable and compare
structurally.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, ClassVar

from vaping_duty_finance_service.auth.enrolments import ACTIVATED


class Predicate:
    """Base for anything that can appear in the auth service's "authorise" list."""

    def to_json(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    def __and__(self, other: Predicate) -> CompositePredicate:
        if not isinstance(other, Predicate):
            return NotImplemented
        return CompositePredicate(_flatten(self) + _flatten(other))


def _flatten(predicate: Predicate) -> tuple[Predicate, ...]:
    if isinstance(predicate, CompositePredicate):
        return predicate.predicates
    return (predicate,)


@dataclass(frozen=True)
class CompositePredicate(Predicate):
    """Conjunction of predicates; the auth service requires all to hold."""

    predicates: tuple[Predicate, ...]

    def to_json(self) -> list[dict[str, Any]]:
        return [fragment for predicate in self.predicates for fragment in predicate.to_json()]


class AuthProvider(str, Enum):
    GOVERNMENT_GATEWAY = "GovernmentGateway"
    ONE_LOGIN = "OneLogin"
    PRIVILEGED_APPLICATION = "PrivilegedApplication"
    STANDARD_APPLICATION = "StandardApplication"


@dataclass(frozen=True, init=False)
class AuthProviders(Predicate):
    """The caller must have logged in through one of these providers."""

    providers: tuple[AuthProvider, ...]

    def __init__(self, *providers: AuthProvider) -> None:
        if not providers:
            raise ValueError("AuthProviders requires at least one provider")
        object.__setattr__(self, "providers", tuple(providers))

    def to_json(self) -> list[dict[str, Any]]:
        return [{"authProviders": [provider.value for provider in self.providers]}]


@dataclass(frozen=True)
class EnrolmentPredicate(Predicate):
    """The caller must hold an activated enrolment with this service key."""

    key: str
    state: str = ACTIVATED

    def to_json(self) -> list[dict[str, Any]]:
        return [{"identifiers": [], "state": self.state, "enrolment": self.key}]


@dataclass(frozen=True)
class CredentialStrength(Predicate):
    """The login credential must have been verified at this strength."""

    STRONG: ClassVar[str] = "strong"
    WEAK: ClassVar[str] = "weak"
    VALID_STRENGTHS: ClassVar[frozenset[str]] = frozenset({STRONG, WEAK})

    strength: str

    def __post_init__(self) -> None:
        if self.strength not in self.VALID_STRENGTHS:
            raise ValueError(f"Unknown credential strength: {self.strength}")

    def to_json(self) -> list[dict[str, Any]]:
        return [{"credentialStrength": self.strength}]


class AffinityGroup(Predicate, Enum):
    """The kind of entity that authenticated."""

    INDIVIDUAL = "Individual"
    ORGANISATION = "Organisation"
    AGENT = "Agent"

    def to_json(self) -> list[dict[str, Any]]:
        return [{"affinityGroup": self.value}]


class ConfidenceLevel(Predicate, IntEnum):
    """Minimum trust tier for the authenticated identity."""

    L50 = 50
    L200 = 200
    L250 = 250
    L500 = 500

    def to_json(self) -> list[dict[str, Any]]:
        return [{"confidenceLevel": int(self)}]

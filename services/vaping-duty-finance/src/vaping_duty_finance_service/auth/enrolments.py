"""Enrolments held by an authenticated caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ACTIVATED = "Activated"


class EnrolmentParseError(ValueError):
    """Raised when the auth service returns an enrolment in an unexpected shape."""


@dataclass(frozen=True)
class EnrolmentIdentifier:
    """A single identifier key/value pair on an enrolment (e.g. VPPAID)."""

    key: str
    value: str


@dataclass(frozen=True)
class Enrolment:
    """A caller's registration with a tax service, keyed by service identifier."""

    key: str
    identifiers: tuple[EnrolmentIdentifier, ...] = ()
    state: str = ACTIVATED

    def get_identifier(self, key: str) -> EnrolmentIdentifier | None:
        """Return the first identifier with the given key, if any."""
        return next((identifier for identifier in self.identifiers if identifier.key == key), None)

    @property
    def is_activated(self) -> bool:
        return self.state == ACTIVATED

    @classmethod
    def from_json(cls, data: Any) -> Enrolment:
        """Parse one entry of the auth service's authorisedEnrolments list."""
        if not isinstance(data, dict):
            raise EnrolmentParseError("Enrolment must be a JSON object")

        key = data.get("key")
        state = data.get("state")
        raw_identifiers = data.get("identifiers", [])
        if not isinstance(key, str) or not isinstance(state, str):
            raise EnrolmentParseError("Enrolment key and state must be strings")
        if not isinstance(raw_identifiers, list):
            raise EnrolmentParseError("Enrolment identifiers must be a list")

        identifiers: list[EnrolmentIdentifier] = []
        for raw in raw_identifiers:
            if (
                not isinstance(raw, dict)
                or not isinstance(raw.get("key"), str)
                or not isinstance(raw.get("value"), str)
            ):
                raise EnrolmentParseError("Enrolment identifier must have string key and value")
            identifiers.append(EnrolmentIdentifier(key=raw["key"], value=raw["value"]))

        return cls(key=key, identifiers=tuple(identifiers), state=state)


@dataclass(frozen=True)
class Enrolments:
    """The set of enrolments returned for one authenticated session, unique by key."""

    enrolments: frozenset[Enrolment] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        keys = [enrolment.key for enrolment in self.enrolments]
        if len(keys) != len(set(keys)):
            raise EnrolmentParseError("Enrolment keys must be unique")

    def get_enrolment(self, key: str) -> Enrolment | None:
        """Return the enrolment for a service key, if the caller holds one."""
        return next((enrolment for enrolment in self.enrolments if enrolment.key == key), None)

    def __len__(self) -> int:
        return len(self.enrolments)

    @classmethod
    def of(cls, *enrolments: Enrolment) -> Enrolments:
        return cls(frozenset(enrolments))

    @classmethod
    def from_json(cls, data: Any) -> Enrolments:
        if not isinstance(data, list):
            raise EnrolmentParseError("authorisedEnrolments must be a list")
        return cls(frozenset(Enrolment.from_json(item) for item in data))

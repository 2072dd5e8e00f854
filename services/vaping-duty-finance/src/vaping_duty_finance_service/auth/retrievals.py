"""
Values requested from the auth service alongside an authorisation check.

A Retrieval names the auth service properties it needs and knows how to read
its value out of the JSON response. Two retrievals combine with ``&``; the
combined retrieval reads a pair, so ``internal_id & authorised_enrolments``
yields ``(internal_id_or_none, enrolments)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from vaping_duty_finance_service.auth.enrolments import Enrolments

if TYPE_CHECKING:
    from collections.abc import Callable

A = TypeVar("A")
B = TypeVar("B")


class RetrievalParseError(ValueError):
    """Raised when a retrieved property has an unexpected type."""


@dataclass(frozen=True)
class Retrieval(Generic[A]):
    """A set of auth service property names and the reader for their value."""

    property_names: tuple[str, ...]
    reads: Callable[[dict[str, Any]], A]

    def read(self, body: dict[str, Any]) -> A:
        return self.reads(body)

    def __and__(self, other: Retrieval[B]) -> Retrieval[tuple[A, B]]:
        if not isinstance(other, Retrieval):
            return NotImplemented
        first, second = self.reads, other.reads
        return Retrieval(
            property_names=self.property_names + other.property_names,
            reads=lambda body: (first(body), second(body)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Retrieval):
            return NotImplemented
        return self.property_names == other.property_names

    def __hash__(self) -> int:
        return hash(self.property_names)


def _read_internal_id(body: dict[str, Any]) -> str | None:
    value = body.get("internalId")
    if value is not None and not isinstance(value, str):
        raise RetrievalParseError("internalId must be a string")
    return value


def _read_authorised_enrolments(body: dict[str, Any]) -> Enrolments:
    return Enrolments.from_json(body.get("authorisedEnrolments", []))


internal_id: Retrieval[str | None] = Retrieval(("internalId",), _read_internal_id)
authorised_enrolments: Retrieval[Enrolments] = Retrieval(
    ("authorisedEnrolments",), _read_authorised_enrolments
)

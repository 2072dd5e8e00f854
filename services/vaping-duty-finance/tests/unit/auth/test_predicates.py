"""Unit tests for authorisation predicates."""

from __future__ import annotations

import pytest

from vaping_duty_finance_service.auth.predicates import (
    AffinityGroup,
    AuthProvider,
    AuthProviders,
    CompositePredicate,
    ConfidenceLevel,
    CredentialStrength,
    EnrolmentPredicate,
)


@pytest.mark.unit
class TestPredicateJson:
    """Each predicate renders the fragment the auth service expects."""

    def test_auth_providers(self) -> None:
        predicate = AuthProviders(AuthProvider.GOVERNMENT_GATEWAY)
        assert predicate.to_json() == [{"authProviders": ["GovernmentGateway"]}]

    def test_auth_providers_requires_one_provider(self) -> None:
        with pytest.raises(ValueError):
            AuthProviders()

    def test_enrolment(self) -> None:
        assert EnrolmentPredicate("HMRC-VPD-ORG").to_json() == [
            {"identifiers": [], "state": "Activated", "enrolment": "HMRC-VPD-ORG"},
        ]

    def test_credential_strength(self) -> None:
        assert CredentialStrength("strong").to_json() == [{"credentialStrength": "strong"}]

    def test_unknown_credential_strength_rejected(self) -> None:
        with pytest.raises(ValueError):
            CredentialStrength("medium")

    def test_affinity_group(self) -> None:
        assert AffinityGroup.ORGANISATION.to_json() == [{"affinityGroup": "Organisation"}]

    def test_confidence_level(self) -> None:
        assert ConfidenceLevel.L50.to_json() == [{"confidenceLevel": 50}]

    def test_unknown_confidence_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            ConfidenceLevel(75)


@pytest.mark.unit
class TestConjunction:
    """Predicates combined with & form one flat conjunction."""

    def test_conjunction_is_flat_and_ordered(self) -> None:
        predicate = (
            AuthProviders(AuthProvider.GOVERNMENT_GATEWAY)
            & EnrolmentPredicate("HMRC-VPD-ORG")
            & CredentialStrength(CredentialStrength.STRONG)
            & AffinityGroup.ORGANISATION
            & ConfidenceLevel.L50
        )

        assert isinstance(predicate, CompositePredicate)
        assert len(predicate.predicates) == 5
        assert predicate.to_json() == [
            {"authProviders": ["GovernmentGateway"]},
            {"identifiers": [], "state": "Activated", "enrolment": "HMRC-VPD-ORG"},
            {"credentialStrength": "strong"},
            {"affinityGroup": "Organisation"},
            {"confidenceLevel": 50},
        ]

    def test_enum_predicates_combine_on_the_left(self) -> None:
        predicate = ConfidenceLevel.L200 & AffinityGroup.INDIVIDUAL

        assert predicate.to_json() == [
            {"confidenceLevel": 200},
            {"affinityGroup": "Individual"},
        ]

    def test_equal_policies_compare_equal(self) -> None:
        first = EnrolmentPredicate("HMRC-VPD-ORG") & ConfidenceLevel.L50
        second = EnrolmentPredicate("HMRC-VPD-ORG") & ConfidenceLevel.L50

        assert first == second
        assert hash(first) == hash(second)

    def test_different_policies_compare_unequal(self) -> None:
        first = EnrolmentPredicate("HMRC-VPD-ORG") & ConfidenceLevel.L50
        second = EnrolmentPredicate("HMRC-VPD-ORG") & ConfidenceLevel.L200

        assert first != second

"""Tests for the Contract Negotiator."""

import pytest

from intent_kernel.models.contract import ProviderOffering, ServiceContract
from intent_kernel.models.priority import PriorityVector
from intent_kernel.negotiation.negotiator import ContractNegotiator


def _vector(cost=0.5, latency=0.5, security=0.5, carbon=0.3) -> PriorityVector:
    return PriorityVector(cost=cost, latency=latency, security=security, carbon=carbon)


class TestNegotiate:
    def setup_method(self):
        self.negotiator = ContractNegotiator()

    def test_linear_interpolation(self):
        contract = self.negotiator.negotiate(_vector(cost=0.5, latency=0.5, security=0.5, carbon=0.5))
        assert contract.max_latency_ms == pytest.approx(200.0 - 0.5 * 190.0)
        assert contract.max_cost_per_hour == pytest.approx(20.0 - 0.5 * 19.5)
        assert contract.min_availability == pytest.approx(95.0 + 0.5 * 4.9)
        assert contract.min_security_level == pytest.approx(5.0)
        assert contract.max_carbon_grams == pytest.approx(60.0)
        assert contract.accepted is True

    def test_zero_priorities_give_loosest_bounds(self):
        contract = self.negotiator.negotiate(_vector(0.0, 0.0, 0.0, 0.0))
        assert contract.max_latency_ms == pytest.approx(200.0)
        assert contract.max_cost_per_hour == pytest.approx(20.0)
        assert contract.min_availability == pytest.approx(95.0)
        assert contract.min_security_level == 0.0
        assert contract.max_carbon_grams == pytest.approx(100.0)

    def test_full_security_reaches_ceiling(self):
        contract = self.negotiator.negotiate(_vector(security=1.0))
        assert contract.min_availability == pytest.approx(99.9)
        assert contract.min_security_level == pytest.approx(10.0)

    def test_monotonic_in_cost_priority(self):
        previous = None
        for step in range(11):
            contract = self.negotiator.negotiate(_vector(cost=step / 10, latency=0.2))
            if previous is not None:
                assert contract.max_cost_per_hour <= previous
            previous = contract.max_cost_per_hour

    def test_conflict_relaxes_both_bounds(self):
        contract = self.negotiator.negotiate(_vector(cost=0.9, latency=0.9))
        linear_latency = 200.0 - 0.9 * 190.0
        linear_cost = 20.0 - 0.9 * 19.5
        assert contract.max_latency_ms > linear_latency
        assert contract.max_cost_per_hour > linear_cost
        assert contract.max_latency_ms == pytest.approx(linear_latency * 1.2)
        assert contract.max_cost_per_hour == pytest.approx(linear_cost * 1.15)
        assert contract.accepted is True

    def test_conflict_threshold_is_strict(self):
        assert self.negotiator.detect_conflict(_vector(cost=0.9, latency=0.9)) is True
        assert self.negotiator.detect_conflict(_vector(cost=0.7, latency=0.9)) is False
        assert self.negotiator.detect_conflict(_vector(cost=0.9, latency=0.5)) is False

    def test_unacceptable_terms_are_returned_unaccepted(self):
        offering = ProviderOffering(latency_relaxation=0.5, cost_relaxation=0.5)
        negotiator = ContractNegotiator(offering)
        contract = negotiator.negotiate(_vector(cost=1.0, latency=1.0))
        assert contract.accepted is False
        assert contract.max_latency_ms == pytest.approx(5.0)
        assert contract.max_cost_per_hour == pytest.approx(0.25)

    def test_each_negotiation_is_a_new_contract(self):
        a = self.negotiator.negotiate(_vector())
        b = self.negotiator.negotiate(_vector())
        assert a.id != b.id


class TestRenegotiate:
    def setup_method(self):
        self.negotiator = ContractNegotiator()
        self.contract = ServiceContract(
            max_latency_ms=100.0,
            max_cost_per_hour=5.0,
            min_availability=97.0,
            min_security_level=8.0,
            max_carbon_grams=40.0,
        )

    def test_violated_latency_relaxed(self):
        renewed = self.negotiator.renegotiate(self.contract, 150.0, 4.0)
        assert renewed.max_latency_ms == pytest.approx(165.0)
        assert renewed.max_cost_per_hour == 5.0

    def test_violated_cost_relaxed(self):
        renewed = self.negotiator.renegotiate(self.contract, 90.0, 8.0)
        assert renewed.max_latency_ms == 100.0
        assert renewed.max_cost_per_hour == pytest.approx(8.8)

    def test_other_terms_carried_over(self):
        renewed = self.negotiator.renegotiate(self.contract, 150.0, 8.0)
        assert renewed.min_availability == 97.0
        assert renewed.min_security_level == 8.0
        assert renewed.max_carbon_grams == 40.0

    def test_always_accepted_and_new(self):
        renewed = self.negotiator.renegotiate(self.contract, 50.0, 1.0)
        assert renewed.accepted is True
        assert renewed.id != self.contract.id
        assert self.contract.accepted is False
        assert renewed.max_latency_ms == 100.0
        assert renewed.max_cost_per_hour == 5.0

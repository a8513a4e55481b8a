"""
Contract Negotiator — turns a Priority Vector into a Service Contract.

Behavioral Contract:
- Each bound is a linear interpolation between the provider's extremes
  (higher priority means a stricter bound)
- Wanting both cheap and fast above the conflict threshold relaxes both
  bounds instead of picking a winner
- The provider accepts only terms it can actually offer; unaccepted
  contracts are still returned to the caller
- Re-negotiation is cooperative: the new contract is always accepted
"""

import logging
from typing import Optional

from intent_kernel.models.contract import ProviderOffering, ServiceContract
from intent_kernel.models.priority import PriorityVector

logger = logging.getLogger(__name__)


class ContractNegotiator:
    """Negotiates service contracts against a fixed provider offering."""

    def __init__(self, offering: Optional[ProviderOffering] = None):
        self.offering = offering or ProviderOffering()

    def detect_conflict(self, vector: PriorityVector) -> bool:
        """Cheap AND fast: jointly unsatisfiable at the strict bounds."""
        threshold = self.offering.conflict_threshold
        return vector.cost > threshold and vector.latency > threshold

    def negotiate(self, vector: PriorityVector) -> ServiceContract:
        """Negotiate a contract for a user's priorities."""
        o = self.offering

        max_latency = o.max_latency_ms - vector.latency * (
            o.max_latency_ms - o.min_latency_ms
        )
        max_cost = o.max_cost_per_hour - vector.cost * (
            o.max_cost_per_hour - o.min_cost_per_hour
        )

        if self.detect_conflict(vector):
            logger.info(
                "Conflict for %s: cost and latency both above %.2f, relaxing bounds",
                vector.user_id, o.conflict_threshold,
            )
            max_latency *= o.latency_relaxation
            max_cost *= o.cost_relaxation

        min_availability = o.base_availability + vector.security * (
            o.ceiling_availability - o.base_availability
        )
        security_level = vector.security * 10.0
        max_carbon = o.carbon_ceiling_grams - vector.carbon * o.carbon_reduction_range

        accepted = (
            max_latency >= o.min_latency_ms
            and max_cost >= o.min_cost_per_hour
        )

        contract = ServiceContract(
            max_latency_ms=max_latency,
            max_cost_per_hour=max_cost,
            min_availability=min_availability,
            min_security_level=security_level,
            max_carbon_grams=max_carbon,
            accepted=accepted,
        )

        if accepted:
            logger.info("Contract accepted: %s", contract)
        else:
            logger.warning("Contract rejected, terms too strict for provider: %s", contract)
        return contract

    def renegotiate(
        self,
        contract: ServiceContract,
        observed_latency: float,
        observed_cost: float,
    ) -> ServiceContract:
        """
        Relax any violated bound to the observed value plus a buffer.

        Bounds that were not violated carry over unchanged. Returns a new,
        accepted contract; the original is left untouched.
        """
        buffer = self.offering.renegotiation_buffer
        new_max_latency = contract.max_latency_ms
        new_max_cost = contract.max_cost_per_hour

        if observed_latency > contract.max_latency_ms:
            new_max_latency = observed_latency * buffer
            logger.info("Relaxed latency bound to %.2f ms", new_max_latency)

        if observed_cost > contract.max_cost_per_hour:
            new_max_cost = observed_cost * buffer
            logger.info("Relaxed cost bound to $%.2f/hr", new_max_cost)

        return ServiceContract(
            max_latency_ms=new_max_latency,
            max_cost_per_hour=new_max_cost,
            min_availability=contract.min_availability,
            min_security_level=contract.min_security_level,
            max_carbon_grams=contract.max_carbon_grams,
            accepted=True,
        )

"""Service Contract — negotiated service-level bounds and provider offering."""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _contract_id() -> str:
    return f"sla_{uuid4().hex[:12]}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProviderOffering(BaseModel):
    """What the cloud provider is able to offer, and how it compromises."""

    min_latency_ms: float = 10.0            # Best possible
    max_latency_ms: float = 200.0           # Worst acceptable
    min_cost_per_hour: float = 0.50         # Cheapest tier
    max_cost_per_hour: float = 20.0         # Premium tier
    base_availability: float = 95.0         # Percent
    ceiling_availability: float = 99.9      # Percent
    carbon_ceiling_grams: float = 100.0
    carbon_reduction_range: float = 80.0
    conflict_threshold: float = 0.7
    latency_relaxation: float = 1.2         # Applied when cost and latency conflict
    cost_relaxation: float = 1.15
    renegotiation_buffer: float = 1.1       # Headroom over an observed violation


class ServiceContract(BaseModel):
    """
    A service-level agreement generated from a Priority Vector.

    Frozen: acceptance is decided when the contract is created.
    Re-negotiation always produces a new contract.
    """

    model_config = ConfigDict(frozen=True)

    max_latency_ms: float
    max_cost_per_hour: float
    min_availability: float = 99.0
    min_security_level: float = Field(default=5.0, ge=0.0, le=10.0)
    max_carbon_grams: float = 100.0
    accepted: bool = False
    id: str = Field(default_factory=_contract_id)
    created_at: datetime = Field(default_factory=_utcnow)

    def is_satisfied(
        self,
        actual_latency: float,
        actual_cost: float,
        actual_availability: float,
    ) -> bool:
        """Check observed performance against latency, cost and availability."""
        return (
            actual_latency <= self.max_latency_ms
            and actual_cost <= self.max_cost_per_hour
            and actual_availability >= self.min_availability
        )

    def calculate_penalty(self, actual_latency: float, actual_cost: float) -> float:
        """Penalty proportional to how far latency and cost exceed their bounds."""
        penalty = 0.0
        if actual_latency > self.max_latency_ms:
            penalty += (actual_latency - self.max_latency_ms) / self.max_latency_ms * 10.0
        if actual_cost > self.max_cost_per_hour:
            penalty += (actual_cost - self.max_cost_per_hour) / self.max_cost_per_hour * 10.0
        return penalty

    def __str__(self) -> str:
        return (
            f"ServiceContract[id={self.id}, maxLatency={self.max_latency_ms:.1f}ms, "
            f"maxCost=${self.max_cost_per_hour:.2f}/hr, "
            f"minAvail={self.min_availability:.1f}%, "
            f"security={self.min_security_level:.1f}, accepted={self.accepted}]"
        )

"""Resource descriptors supplied by the simulation side of the system."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CandidateConfiguration(BaseModel):
    """One resource offering under evaluation."""

    cost: float                             # $/hr
    latency: float                          # ms
    security_level: float = 5.0             # 0-10
    carbon_emission: float = 50.0           # grams/hr


class HostDescriptor(BaseModel):
    """
    Read-only snapshot of a host's telemetry.

    Freshness is the caller's responsibility; the kernel never caches it.
    """

    model_config = ConfigDict(frozen=True)

    host_id: str
    total_compute: float = Field(ge=0)      # MIPS
    allocated_compute: float = Field(ge=0, default=0.0)
    free_cores: int = Field(ge=0)
    memory_capacity: float = Field(ge=0)
    memory_available: float = Field(ge=0)
    bandwidth_capacity: float = Field(ge=0)
    bandwidth_available: float = Field(ge=0)
    resident_vm_count: int = Field(ge=0, default=0)

    @property
    def utilization(self) -> float:
        return self.allocated_compute / max(1.0, self.total_compute)


class VmRequest(BaseModel):
    """Resource shape requested for a VM."""

    model_config = ConfigDict(frozen=True)

    vm_id: str
    cores: int = Field(ge=0)
    memory: float = Field(ge=0)
    bandwidth: float = Field(ge=0)
    compute: Optional[float] = None         # MIPS per core, informational

"""Placement results — outcome of scoring candidate hosts for a VM."""

from typing import Dict, List, Optional

from pydantic import BaseModel, computed_field

from intent_kernel.models.resources import HostDescriptor


class PlacementDecision(BaseModel):
    """The chosen host, or an explicit "no suitable host" outcome."""

    vm_id: str
    host: Optional[HostDescriptor] = None
    score: Optional[float] = None
    host_scores: Dict[str, float] = {}      # Feasible hosts only
    skipped_hosts: List[str] = []           # Failed the resource check

    @computed_field
    @property
    def feasible(self) -> bool:
        return self.host is not None


class HostComparison(BaseModel):
    """Side-by-side score of two hosts for diagnostics."""

    first_host_id: str
    first_score: float
    second_host_id: str
    second_score: float
    winner_host_id: str

    def __str__(self) -> str:
        return (
            f"Host {self.first_host_id} score={self.first_score:.2f} vs "
            f"Host {self.second_host_id} score={self.second_score:.2f} "
            f"→ Winner: Host {self.winner_host_id}"
        )

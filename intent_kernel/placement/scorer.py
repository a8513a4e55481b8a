"""
Placement Scorer — picks a host for a VM based on user intent.

Traditional placement only asks "does it fit?". Here fit is a hard filter
and the user's priorities decide among the hosts that pass it.

Scoring terms (each priority × raw score × scale):
  latency:  free compute / total compute         × 40  (headroom)
  cost:     allocated compute / total compute    × 30  (consolidation is cheap)
  security: 1 / (1 + resident VMs)               × 20  (isolation)
  carbon:   allocated compute / total compute    × 10  (fewer active hosts)
"""

import logging
import math
from typing import Sequence

from intent_kernel.models.placement import HostComparison, PlacementDecision
from intent_kernel.models.priority import PriorityVector
from intent_kernel.models.resources import HostDescriptor, VmRequest

logger = logging.getLogger(__name__)

LATENCY_SCALE = 40.0
COST_SCALE = 30.0
SECURITY_SCALE = 20.0
CARBON_SCALE = 10.0


class PlacementScorer:
    """Intent-aware VM placement over host telemetry snapshots."""

    def is_feasible(self, host: HostDescriptor, vm: VmRequest) -> bool:
        """Enough free cores, memory and bandwidth for the VM."""
        enough_cores = host.free_cores >= vm.cores
        enough_memory = host.memory_available >= vm.memory
        enough_bandwidth = host.bandwidth_available >= vm.bandwidth
        return enough_cores and enough_memory and enough_bandwidth

    def host_score(self, host: HostDescriptor, vector: PriorityVector) -> float:
        """How well a host matches the user's intent."""
        total = max(1.0, host.total_compute)
        available = max(0.0, host.total_compute - host.allocated_compute)

        performance_score = available / total
        utilization = host.allocated_compute / total
        isolation_score = 1.0 / (1.0 + host.resident_vm_count)

        # Utilization stands in for both cost and carbon
        return (
            vector.latency * performance_score * LATENCY_SCALE
            + vector.cost * utilization * COST_SCALE
            + vector.security * isolation_score * SECURITY_SCALE
            + vector.carbon * utilization * CARBON_SCALE
        )

    def select_host(
        self,
        vm: VmRequest,
        hosts: Sequence[HostDescriptor],
        vector: PriorityVector,
    ) -> PlacementDecision:
        """
        Choose the best feasible host.

        Hosts that fail the resource check are skipped, not penalized. On an
        exact tie the first host encountered wins. When nothing fits, the
        decision carries no host.
        """
        best_host = None
        best_score = -math.inf
        host_scores = {}
        skipped = []

        for host in hosts:
            if not self.is_feasible(host, vm):
                logger.debug("Host %s skipped for VM %s: insufficient resources",
                             host.host_id, vm.vm_id)
                skipped.append(host.host_id)
                continue

            score = self.host_score(host, vector)
            host_scores[host.host_id] = score
            logger.debug("Host %s -> score=%.2f", host.host_id, score)

            if score > best_score:
                best_score = score
                best_host = host

        if best_host is None:
            logger.warning("No suitable host for VM %s (%d hosts checked)",
                           vm.vm_id, len(hosts))
            return PlacementDecision(
                vm_id=vm.vm_id,
                host_scores=host_scores,
                skipped_hosts=skipped,
            )

        logger.info("VM %s -> host %s (score=%.2f)", vm.vm_id, best_host.host_id, best_score)
        return PlacementDecision(
            vm_id=vm.vm_id,
            host=best_host,
            score=best_score,
            host_scores=host_scores,
            skipped_hosts=skipped,
        )

    def compare_hosts(
        self,
        first: HostDescriptor,
        second: HostDescriptor,
        vector: PriorityVector,
    ) -> HostComparison:
        """Score two hosts side by side. The first wins only if strictly better."""
        first_score = self.host_score(first, vector)
        second_score = self.host_score(second, vector)
        winner = first if first_score > second_score else second
        return HostComparison(
            first_host_id=first.host_id,
            first_score=first_score,
            second_host_id=second.host_id,
            second_score=second_score,
            winner_host_id=winner.host_id,
        )

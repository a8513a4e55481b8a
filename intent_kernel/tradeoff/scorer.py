"""
Tradeoff Scorer — how well a resource configuration matches a user's intent.

Each priority weighs an inverse-scaled metric, with per-dimension
constants chosen so no single term dominates at typical magnitudes.
Higher scores are better; scores are not bounded to [0, 1].
"""

import logging
import math
from typing import Sequence

from intent_kernel.models.contract import ServiceContract
from intent_kernel.models.priority import PriorityVector
from intent_kernel.models.resources import CandidateConfiguration

logger = logging.getLogger(__name__)

MIN_METRIC = 0.01

DEFAULT_SECURITY_LEVEL = 5.0
DEFAULT_CARBON_EMISSION = 50.0


class TradeoffInputError(ValueError):
    """Raised when candidate inputs are malformed (empty or mismatched)."""
    pass


class TradeoffScorer:
    """Intent-weighted multi-objective scoring of resource configurations."""

    def score(
        self,
        cost: float,
        latency: float,
        vector: PriorityVector,
        security_level: float = DEFAULT_SECURITY_LEVEL,
        carbon_emission: float = DEFAULT_CARBON_EMISSION,
    ) -> float:
        """
        Score a configuration against a Priority Vector.

        Omitting security_level and carbon_emission gives the cost/latency
        form of the score.
        """
        if cost <= 0:
            cost = MIN_METRIC
        if latency <= 0:
            latency = MIN_METRIC

        cost_score = vector.cost * (1.0 / cost) * 10.0
        latency_score = vector.latency * (1.0 / latency) * 1000.0
        security_score = vector.security * security_level
        carbon_score = vector.carbon * (1.0 / max(carbon_emission, MIN_METRIC)) * 100.0

        return cost_score + latency_score + security_score + carbon_score

    def score_configuration(
        self, config: CandidateConfiguration, vector: PriorityVector
    ) -> float:
        return self.score(
            config.cost,
            config.latency,
            vector,
            security_level=config.security_level,
            carbon_emission=config.carbon_emission,
        )

    def find_best(
        self,
        costs: Sequence[float],
        latencies: Sequence[float],
        vector: PriorityVector,
    ) -> int:
        """
        Index of the best cost/latency candidate.

        Strict comparison: on an exact tie the earliest index wins.
        """
        if len(costs) != len(latencies):
            raise TradeoffInputError(
                f"Got {len(costs)} costs but {len(latencies)} latencies"
            )
        if not costs:
            raise TradeoffInputError("No candidates to choose from")

        best_index = 0
        best_score = -math.inf
        for i, (cost, latency) in enumerate(zip(costs, latencies)):
            s = self.score(cost, latency, vector)
            logger.debug(
                "Option %d: cost=$%.2f, latency=%.1fms -> score=%.2f",
                i, cost, latency, s,
            )
            if s > best_score:
                best_score = s
                best_index = i

        logger.info("Best option %d (score=%.2f)", best_index, best_score)
        return best_index

    def find_best_configuration(
        self,
        candidates: Sequence[CandidateConfiguration],
        vector: PriorityVector,
    ) -> int:
        """Like find_best, but scores all four dimensions of each candidate."""
        if not candidates:
            raise TradeoffInputError("No candidates to choose from")

        best_index = 0
        best_score = -math.inf
        for i, candidate in enumerate(candidates):
            s = self.score_configuration(candidate, vector)
            if s > best_score:
                best_score = s
                best_index = i
        return best_index

    def meets_contract(
        self, cost: float, latency: float, contract: ServiceContract
    ) -> bool:
        """Cost and latency within the contract. Availability is checked elsewhere."""
        return (
            cost <= contract.max_cost_per_hour
            and latency <= contract.max_latency_ms
        )

    def pareto_score(self, cost: float, latency: float) -> float:
        """
        Balanced (not intent-weighted) efficiency in (0, 1].

        Negative or NaN inputs are treated as zero, so they score like a
        free, instant configuration.
        """
        cost = cost if cost > 0.0 else 0.0
        latency = latency if latency > 0.0 else 0.0
        normalized_cost = 1.0 / (1.0 + cost)
        normalized_latency = 1.0 / (1.0 + latency / 100.0)
        return math.sqrt(normalized_cost * normalized_latency)

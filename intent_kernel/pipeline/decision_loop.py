"""
Decision Loop — one request from free text to contract, choice and host.

  EXTRACT → LEARN → PREDICT → NEGOTIATE → CHOOSE → (COMPLY | RENEGOTIATE) → PLACE

Each stage only consumes the outputs of earlier stages. The loop holds no
state of its own; per-user history lives in the tracker's store.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

from intent_kernel.intent.extractor import IntentExtractor
from intent_kernel.learning.tracker import IntentHistoryTracker
from intent_kernel.models.decision import DecisionResult
from intent_kernel.models.resources import (
    CandidateConfiguration,
    HostDescriptor,
    VmRequest,
)
from intent_kernel.negotiation.negotiator import ContractNegotiator
from intent_kernel.placement.scorer import PlacementScorer
from intent_kernel.tradeoff.scorer import TradeoffInputError, TradeoffScorer

logger = logging.getLogger(__name__)


class DecisionLoop:
    """Runs the full decision pipeline for a single request."""

    def __init__(
        self,
        extractor: Optional[IntentExtractor] = None,
        tracker: Optional[IntentHistoryTracker] = None,
        negotiator: Optional[ContractNegotiator] = None,
        tradeoff: Optional[TradeoffScorer] = None,
        placement: Optional[PlacementScorer] = None,
    ):
        self.extractor = extractor or IntentExtractor()
        self.tracker = tracker or IntentHistoryTracker()
        self.negotiator = negotiator or ContractNegotiator()
        self.tradeoff = tradeoff or TradeoffScorer()
        self.placement = placement or PlacementScorer()

    def run(
        self,
        text: str,
        user_id: str,
        candidates: Sequence[CandidateConfiguration],
        vm: Optional[VmRequest] = None,
        hosts: Optional[Sequence[HostDescriptor]] = None,
    ) -> DecisionResult:
        """
        Turn a request into a contract, a configuration and (optionally) a host.

        The configuration is chosen on cost and latency only, using the
        cost/latency form of the tradeoff score. A candidate's
        security_level and carbon_emission are carried into the result but
        never rank it; security and carbon priorities shape the contract
        instead. On an exact tie the earliest candidate wins. If the
        provider accepted the contract but the chosen configuration does not
        meet it, the contract is renegotiated once against that
        configuration. Placement runs only when a VM and hosts are given.
        """
        if not candidates:
            raise TradeoffInputError("No candidate configurations supplied")

        # 1. Extract and learn
        intent = self.tracker.learn(user_id, self.extractor.extract(text))
        predicted = self.tracker.predict(user_id)
        consistency = self.tracker.consistency_score(user_id)

        # 2. Negotiate
        contract = self.negotiator.negotiate(intent)

        # 3. Choose a configuration
        costs = [c.cost for c in candidates]
        latencies = [c.latency for c in candidates]
        best = self.tradeoff.find_best(costs, latencies, intent)
        selected = candidates[best]
        tradeoff_score = self.tradeoff.score(selected.cost, selected.latency, intent)
        meets = self.tradeoff.meets_contract(selected.cost, selected.latency, contract)

        # 4. Renegotiate when an accepted contract is not met
        renegotiated = None
        if contract.accepted and not meets:
            logger.info(
                "Option %d misses contract %s, renegotiating", best, contract.id
            )
            renegotiated = self.negotiator.renegotiate(
                contract, selected.latency, selected.cost
            )

        # 5. Place
        placement = None
        if vm is not None and hosts is not None:
            placement = self.placement.select_host(vm, hosts, intent)

        return DecisionResult(
            id=f"dec_{uuid4().hex[:12]}",
            request_text=text,
            user_id=user_id,
            intent=intent,
            predicted_intent=predicted,
            consistency=consistency,
            contract=contract,
            renegotiated_contract=renegotiated,
            selected_index=best,
            selected_candidate=selected,
            tradeoff_score=tradeoff_score,
            pareto_score=self.tradeoff.pareto_score(selected.cost, selected.latency),
            meets_contract=meets,
            placement=placement,
            decided_at=datetime.now(timezone.utc),
        )

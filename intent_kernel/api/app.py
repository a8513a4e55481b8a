"""
Intent Kernel API — FastAPI endpoints.

Exposes the kernel's decision pipeline via a REST API for:
- Intent extraction
- Per-user history and prediction
- Contract negotiation
- Tradeoff scoring
- VM placement
- End-to-end decisions
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from intent_kernel.history.store import IntentHistoryStore
from intent_kernel.intent.extractor import IntentExtractor
from intent_kernel.learning.tracker import IntentHistoryTracker, InvalidUserIdError
from intent_kernel.models.contract import ServiceContract
from intent_kernel.models.priority import PriorityVector
from intent_kernel.models.resources import (
    CandidateConfiguration,
    HostDescriptor,
    VmRequest,
)
from intent_kernel.negotiation.negotiator import ContractNegotiator
from intent_kernel.pipeline.decision_loop import DecisionLoop
from intent_kernel.placement.scorer import PlacementScorer
from intent_kernel.settings import KernelSettings, configure_logging
from intent_kernel.tradeoff.scorer import TradeoffInputError, TradeoffScorer

logger = logging.getLogger(__name__)


# --- Request/Response Models ---

class TextRequest(BaseModel):
    text: str = ""


class PriorityRequest(BaseModel):
    cost: float = 0.5
    latency: float = 0.5
    security: float = 0.5
    carbon: float = 0.3

    def to_vector(self) -> PriorityVector:
        return PriorityVector(
            cost=self.cost,
            latency=self.latency,
            security=self.security,
            carbon=self.carbon,
        )


class RenegotiateRequest(BaseModel):
    contract: ServiceContract
    observed_latency: float
    observed_cost: float


class ContractCheckRequest(BaseModel):
    contract: ServiceContract
    latency: float
    cost: float
    availability: float


class ScoreRequest(BaseModel):
    intent: PriorityRequest
    cost: float
    latency: float
    security_level: float = 5.0
    carbon_emission: float = 50.0


class BestOptionRequest(BaseModel):
    intent: PriorityRequest
    costs: List[float]
    latencies: List[float]


class ComplianceRequest(BaseModel):
    contract: ServiceContract
    cost: float
    latency: float


class ParetoRequest(BaseModel):
    cost: float
    latency: float


class PlacementRequest(BaseModel):
    intent: PriorityRequest
    vm: VmRequest
    hosts: List[HostDescriptor]


class CompareRequest(BaseModel):
    intent: PriorityRequest
    first: HostDescriptor
    second: HostDescriptor


class DecisionRequest(BaseModel):
    text: str
    user_id: str
    candidates: List[CandidateConfiguration]
    vm: Optional[VmRequest] = None
    hosts: Optional[List[HostDescriptor]] = None


# --- Application Factory ---

def create_app(
    settings: Optional[KernelSettings] = None,
    extractor: Optional[IntentExtractor] = None,
    tracker: Optional[IntentHistoryTracker] = None,
    negotiator: Optional[ContractNegotiator] = None,
    tradeoff: Optional[TradeoffScorer] = None,
    placement: Optional[PlacementScorer] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    config = settings or KernelSettings()
    configure_logging(config.log_level)

    app = FastAPI(
        title="Intent Kernel API",
        description="Intent-driven contract negotiation, tradeoff and placement",
        version="0.1.0",
    )

    # Initialize components
    ex = extractor or IntentExtractor()
    tr = tracker or IntentHistoryTracker(
        store=IntentHistoryStore(), window_size=config.history_window
    )
    ng = negotiator or ContractNegotiator(config.provider)
    ts = tradeoff or TradeoffScorer()
    ps = placement or PlacementScorer()
    loop = DecisionLoop(
        extractor=ex, tracker=tr, negotiator=ng, tradeoff=ts, placement=ps
    )

    # Store components on app state for access in endpoints
    app.state.settings = config
    app.state.extractor = ex
    app.state.tracker = tr
    app.state.negotiator = ng
    app.state.tradeoff = ts
    app.state.placement = ps
    app.state.decision_loop = loop

    @app.get("/health")
    def health():
        return {"status": "ok", "tracked_users": len(tr.store.users())}

    # === INTENTS ===

    @app.post("/intents/extract")
    def extract_intent(req: TextRequest):
        """Parse free text into a priority vector."""
        vector = ex.extract(req.text)
        return {
            "intent": vector.model_dump(mode="json"),
            "matches": ex.match(req.text),
            "dominant": vector.dominant_dimension(),
        }

    @app.post("/intents/explain")
    def explain_intent(req: TextRequest):
        return {"explanation": ex.explain(req.text)}

    # === USER HISTORY ===

    @app.post("/users/{user_id}/intents")
    def learn_intent(user_id: str, req: PriorityRequest):
        """Record a priority vector in a user's history."""
        try:
            stored = tr.learn(user_id, req.to_vector())
        except InvalidUserIdError as exc:
            raise HTTPException(400, str(exc))
        return {
            "intent": stored.model_dump(mode="json"),
            "history_size": tr.history_size(user_id),
        }

    @app.get("/users/{user_id}/intents")
    def get_history(user_id: str):
        try:
            history = tr.history(user_id)
        except InvalidUserIdError as exc:
            raise HTTPException(400, str(exc))
        return [v.model_dump(mode="json") for v in history]

    @app.get("/users/{user_id}/prediction")
    def predict_intent(user_id: str):
        try:
            predicted = tr.predict(user_id)
        except InvalidUserIdError as exc:
            raise HTTPException(400, str(exc))
        return predicted.model_dump(mode="json")

    @app.get("/users/{user_id}/consistency")
    def get_consistency(user_id: str):
        try:
            score = tr.consistency_score(user_id)
        except InvalidUserIdError as exc:
            raise HTTPException(400, str(exc))
        return {"user_id": user_id, "consistency": score}

    # === CONTRACTS ===

    @app.post("/contracts/negotiate")
    def negotiate_contract(req: PriorityRequest):
        """Negotiate a contract; unaccepted contracts are returned as-is."""
        vector = req.to_vector()
        contract = ng.negotiate(vector)
        return {
            "contract": contract.model_dump(mode="json"),
            "conflict": ng.detect_conflict(vector),
        }

    @app.post("/contracts/renegotiate")
    def renegotiate_contract(req: RenegotiateRequest):
        contract = ng.renegotiate(req.contract, req.observed_latency, req.observed_cost)
        return contract.model_dump(mode="json")

    @app.post("/contracts/check")
    def check_contract(req: ContractCheckRequest):
        """Observed performance against a contract, with penalty."""
        return {
            "satisfied": req.contract.is_satisfied(
                req.latency, req.cost, req.availability
            ),
            "penalty": req.contract.calculate_penalty(req.latency, req.cost),
        }

    # === TRADEOFF ===

    @app.post("/tradeoff/score")
    def score_configuration(req: ScoreRequest):
        score = ts.score(
            req.cost,
            req.latency,
            req.intent.to_vector(),
            security_level=req.security_level,
            carbon_emission=req.carbon_emission,
        )
        return {"score": score}

    @app.post("/tradeoff/best")
    def find_best_option(req: BestOptionRequest):
        try:
            index = ts.find_best(req.costs, req.latencies, req.intent.to_vector())
        except TradeoffInputError as exc:
            raise HTTPException(400, str(exc))
        return {"best_index": index}

    @app.post("/tradeoff/compliance")
    def check_compliance(req: ComplianceRequest):
        return {"meets_contract": ts.meets_contract(req.cost, req.latency, req.contract)}

    @app.post("/tradeoff/pareto")
    def pareto(req: ParetoRequest):
        return {"pareto_score": ts.pareto_score(req.cost, req.latency)}

    # === PLACEMENT ===

    @app.post("/placement/select")
    def select_host(req: PlacementRequest):
        """Pick a host; an infeasible outcome is a normal response."""
        decision = ps.select_host(req.vm, req.hosts, req.intent.to_vector())
        return decision.model_dump(mode="json")

    @app.post("/placement/compare")
    def compare_hosts(req: CompareRequest):
        comparison = ps.compare_hosts(req.first, req.second, req.intent.to_vector())
        return {
            **comparison.model_dump(mode="json"),
            "summary": str(comparison),
        }

    # === DECISIONS ===

    @app.post("/decisions")
    def run_decision(req: DecisionRequest):
        """Run the full pipeline for one request."""
        try:
            result = loop.run(
                text=req.text,
                user_id=req.user_id,
                candidates=req.candidates,
                vm=req.vm,
                hosts=req.hosts,
            )
        except (InvalidUserIdError, TradeoffInputError) as exc:
            raise HTTPException(400, str(exc))
        return result.model_dump(mode="json")

    return app


# Default application instance
app = create_app()
